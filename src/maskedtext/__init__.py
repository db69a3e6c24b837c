"""Public maskedtext API: masked field state, edit policy and mask rendering."""
from __future__ import annotations

from . import config as _config
from . import cursor as _cursor
from . import edits as _edits
from . import engine as _engine
from . import field as _field
from . import pattern as _pattern

_modules = [
    _pattern,
    _engine,
    _edits,
    _cursor,
    _field,
    _config,
]

__all__: list[str] = []
for _module in _modules:
    for _name in _module.__all__:
        if _name not in __all__:
            __all__.append(_name)
        globals()[_name] = getattr(_module, _name)

__version__ = "0.1.0"


def __dir__() -> list[str]:
    return sorted(set(__all__) | {"__version__"})
