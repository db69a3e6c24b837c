"""Cursor placement for masked fields."""
from __future__ import annotations

from typing import Optional

from .pattern import MaskPattern

__all__ = ["compute_cursor_offset"]


def compute_cursor_offset(mask: MaskPattern, raw_text: str) -> Optional[int]:
    """Return the displayed-text offset of the next fillable slot.

    Literals ahead of the first unfilled slot are skipped over so typing
    resumes on a placeholder.  ``None`` means masking is off and the host keeps
    its own cursor.
    """

    if not mask.is_masking_enabled:
        return None
    remaining = len(mask.strip_prefix(raw_text))
    offset = len(mask.prefix)
    for char in mask.pattern:
        if mask.is_placeholder(char):
            if not remaining:
                break
            remaining -= 1
        offset += 1
    return offset
