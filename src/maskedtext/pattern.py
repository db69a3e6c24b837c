"""Pattern model describing how placeholder slots map onto a masked field."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

DEFAULT_PLACEHOLDER = "_"


class ConfigError(ValueError):
    """Raised when a mask configuration cannot enable masking."""


def validate_placeholder(pattern: str, placeholder: str) -> None:
    if pattern and not placeholder:
        raise ConfigError("masking requires a placeholder character")
    if len(placeholder) > 1:
        raise ConfigError(
            f"placeholder must be a single character, received {placeholder!r}"
        )


@dataclass(frozen=True)
class MaskPattern:
    """Immutable mask configuration shared by the engine and cursor tracker.

    ``pattern`` mixes literal characters with ``placeholder`` slots.  ``prefix``
    is always present at the start of the raw text and can never be edited
    away.  ``allowed_characters`` lists pattern literals that are echoed back
    by :func:`maskedtext.engine.unmask_with_allowed_characters`.
    """

    pattern: str = ""
    placeholder: str = DEFAULT_PLACEHOLDER
    prefix: str = ""
    allowed_characters: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        validate_placeholder(self.pattern, self.placeholder)
        object.__setattr__(self, "allowed_characters", tuple(self.allowed_characters))

    def set_pattern(self, pattern: str, placeholder: str) -> "MaskPattern":
        """Return a copy using ``pattern`` and ``placeholder`` together."""

        return replace(self, pattern=pattern, placeholder=placeholder)

    def set_prefix(self, prefix: str) -> "MaskPattern":
        return replace(self, prefix=prefix)

    def with_allowed_characters(self, characters: Iterable[str]) -> "MaskPattern":
        return replace(self, allowed_characters=tuple(characters))

    @property
    def is_masking_enabled(self) -> bool:
        return bool(self.pattern) and bool(self.placeholder)

    def is_placeholder(self, char: str) -> bool:
        return char == self.placeholder

    @property
    def placeholder_count(self) -> int:
        return sum(1 for char in self.pattern if self.is_placeholder(char))

    @property
    def max_unmasked_length(self) -> int:
        """Length of the raw text once every slot has been filled."""

        return len(self.prefix) + self.placeholder_count

    @property
    def maximum_prefix(self) -> str:
        """Prefix plus the literal run before the first placeholder slot."""

        literals: list[str] = []
        for char in self.pattern:
            if self.is_placeholder(char):
                break
            literals.append(char)
        return self.prefix + "".join(literals)

    def strip_prefix(self, raw_text: str) -> str:
        """Return ``raw_text`` without the prefix when it carries one."""

        if raw_text.startswith(self.prefix):
            return raw_text[len(self.prefix):]
        return raw_text


__all__ = [
    "ConfigError",
    "DEFAULT_PLACEHOLDER",
    "MaskPattern",
    "validate_placeholder",
]
