from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from maskedtext.config import (
    FieldConfig,
    FieldConfigError,
    load_field_config,
    parse_field_config,
)
from maskedtext.pattern import ConfigError, MaskPattern


def write_config(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / "field.toml"
    config_path.write_text(textwrap.dedent(body), encoding="utf-8")
    return config_path


def test_load_field_config_builds_configured_field(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [field]
        pattern = " ___/___/___"
        placeholder = "_"
        prefix = "+68"
        allowed_characters = ["/"]
        content_type = "telephoneNumber"
        value = "111/222/333"
        """,
    )

    config = load_field_config(config_path)
    field = config.build_field()

    assert config.allowed_characters == ("/",)
    assert field.content_type == "telephoneNumber"
    assert field.raw_text == "+68111222333"
    assert field.displayed_text == "+68 111/222/333"
    assert field.is_finished


def test_defaults_apply_to_omitted_keys(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [field]
        pattern = "__-__"
        """,
    )

    config = load_field_config(config_path)

    assert config == FieldConfig(pattern="__-__")
    assert config.build_field().displayed_text == "__-__"


def test_missing_field_table_is_rejected(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [other]
        pattern = "__"
        """,
    )

    with pytest.raises(FieldConfigError, match=r"requires a \[field\] table"):
        load_field_config(config_path)


def test_non_string_values_are_rejected() -> None:
    with pytest.raises(FieldConfigError, match="pattern must be a string"):
        parse_field_config({"field": {"pattern": 5}})
    with pytest.raises(FieldConfigError, match="must be a mapping"):
        parse_field_config({"field": "___"})


def test_pattern_without_placeholder_is_rejected() -> None:
    with pytest.raises(FieldConfigError, match="requires a placeholder"):
        parse_field_config({"field": {"pattern": "___", "placeholder": ""}})
    with pytest.raises(FieldConfigError, match="single character"):
        parse_field_config({"field": {"pattern": "___", "placeholder": "ab"}})


@pytest.mark.parametrize("placeholder", ["", "ab"])
def test_placeholder_errors_match_mask_pattern(placeholder: str) -> None:
    with pytest.raises(ConfigError) as mask_error:
        MaskPattern(pattern="___", placeholder=placeholder)
    with pytest.raises(FieldConfigError) as config_error:
        parse_field_config({"field": {"pattern": "___", "placeholder": placeholder}})

    assert str(config_error.value) == str(mask_error.value)


def test_allowed_characters_accepts_string_shorthand() -> None:
    config = parse_field_config({"field": {"pattern": "__/__-__", "allowed_characters": "/-"}})

    assert config.allowed_characters == ("/", "-")


def test_allowed_characters_entries_must_be_text() -> None:
    with pytest.raises(FieldConfigError, match="allowed character #2"):
        parse_field_config({"field": {"allowed_characters": ["/", 3]}})
    with pytest.raises(FieldConfigError, match="string or an array"):
        parse_field_config({"field": {"allowed_characters": 3}})


def test_build_field_wraps_mask_errors() -> None:
    with pytest.raises(FieldConfigError, match="placeholder"):
        FieldConfig(pattern="___", placeholder="").build_field()
