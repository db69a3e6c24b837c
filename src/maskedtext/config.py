"""Load masked field definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import tomllib

from .field import MaskedField
from .pattern import DEFAULT_PLACEHOLDER, ConfigError, validate_placeholder


class FieldConfigError(ValueError):
    """Raised when a field configuration file fails validation."""


@dataclass(frozen=True)
class FieldConfig:
    """Validated ``[field]`` table used to build a :class:`MaskedField`."""

    pattern: str = ""
    placeholder: str = DEFAULT_PLACEHOLDER
    prefix: str = ""
    allowed_characters: Tuple[str, ...] = field(default_factory=tuple)
    content_type: Optional[str] = None
    value: Optional[str] = None

    def build_field(self) -> MaskedField:
        """Return a new field configured from this table."""

        try:
            masked = MaskedField(
                pattern=self.pattern,
                placeholder=self.placeholder,
                prefix=self.prefix,
                allowed_characters=self.allowed_characters,
                content_type=self.content_type,
            )
        except ConfigError as exc:
            raise FieldConfigError(str(exc)) from exc
        if self.value is not None:
            masked.raw_text = self.value
        return masked


def load_field_config(config_path: Path) -> FieldConfig:
    """Parse and validate the field configuration at ``config_path``."""

    with config_path.open("rb") as stream:
        raw_data = tomllib.load(stream)

    return parse_field_config(raw_data)


def parse_field_config(data: Mapping[str, Any]) -> FieldConfig:
    table = data.get("field")
    if table is None:
        raise FieldConfigError("field configuration requires a [field] table")
    if not isinstance(table, Mapping):
        raise FieldConfigError("[field] section must be a mapping")

    config = FieldConfig(
        pattern=_coerce_text(table, "pattern", default=""),
        placeholder=_coerce_text(table, "placeholder", default=DEFAULT_PLACEHOLDER),
        prefix=_coerce_text(table, "prefix", default=""),
        allowed_characters=_coerce_allowed(table.get("allowed_characters", [])),
        content_type=_coerce_optional_text(table, "content_type"),
        value=_coerce_optional_text(table, "value"),
    )
    try:
        validate_placeholder(config.pattern, config.placeholder)
    except ConfigError as exc:
        raise FieldConfigError(str(exc)) from exc
    return config


def _coerce_text(table: Mapping[str, Any], key: str, *, default: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise FieldConfigError(f"field {key} must be a string, received {type(value)!r}")
    return value


def _coerce_optional_text(table: Mapping[str, Any], key: str) -> Optional[str]:
    if table.get(key) is None:
        return None
    return _coerce_text(table, key, default="")


def _coerce_allowed(entries: Any) -> Tuple[str, ...]:
    if isinstance(entries, str):
        # A bare string lists one allowed character per position.
        return tuple(entries)
    if not isinstance(entries, list):
        raise FieldConfigError("allowed_characters must be a string or an array of strings")

    resolved: list[str] = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, str) or not entry:
            raise FieldConfigError(
                f"allowed character #{index} must be a non-empty string, received {entry!r}"
            )
        resolved.append(entry)
    return tuple(resolved)


__all__ = [
    "FieldConfig",
    "FieldConfigError",
    "load_field_config",
    "parse_field_config",
]
