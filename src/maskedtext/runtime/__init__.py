"""Runtime front ends exposed by the maskedtext package."""
from __future__ import annotations

from typing import Any

from . import cli as _cli
from . import masked_input as _masked_input

_modules = [
    _cli,
    _masked_input,
]

__all__: list[str] = []
_seen: set[str] = set()
for _module in _modules:
    for _name in _module.__all__:
        if _name not in _seen:
            _seen.add(_name)
            __all__.append(_name)
        globals()[_name] = getattr(_module, _name)


def __getattr__(name: str) -> Any:
    for _module in _modules:
        if hasattr(_module, name):
            return getattr(_module, name)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(__all__)
