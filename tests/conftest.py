"""Pytest configuration: make ``src/`` importable and share field fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _SRC.exists() and _src_str not in sys.path:
    sys.path.insert(0, _src_str)

from maskedtext.field import MaskedField  # noqa: E402

PHONE_PATTERN = " ___/___/___"
PHONE_PREFIX = "+68"


@pytest.fixture
def phone_field() -> MaskedField:
    """Field configured like the phone-number demo: ``+68 ___/___/___``."""

    return MaskedField(
        pattern=PHONE_PATTERN,
        placeholder="_",
        prefix=PHONE_PREFIX,
        allowed_characters=["/"],
    )
