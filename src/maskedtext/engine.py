"""Convert between raw slot input and the displayed masked text."""
from __future__ import annotations

from collections import deque

from .pattern import MaskPattern

__all__ = [
    "is_finished",
    "normalise_raw_text",
    "render",
    "unmask",
    "unmask_with_allowed_characters",
]


def render(mask: MaskPattern, raw_text: str) -> str:
    """Substitute ``raw_text`` into the placeholder slots of ``mask``.

    Unfilled slots and literals are emitted verbatim.  A literal that matches
    the next pending raw character consumes it, so pasted text that still
    carries separators lines up with the pattern instead of shifting.
    """

    if not mask.is_masking_enabled:
        return raw_text
    pending = deque(mask.strip_prefix(raw_text))
    output = [mask.prefix]
    for char in mask.pattern:
        if mask.is_placeholder(char) and pending:
            output.append(pending.popleft())
            continue
        output.append(char)
        if pending and pending[0] == char:
            pending.popleft()
    return "".join(output)


def unmask(mask: MaskPattern, displayed_text: str) -> str:
    """Recover the raw text from a rendered ``displayed_text``.

    Slot values are read positionally; the first slot still showing the
    placeholder ends the raw text.
    """

    if not mask.is_masking_enabled:
        return displayed_text
    body = mask.strip_prefix(displayed_text)
    values: list[str] = []
    for index, char in enumerate(mask.pattern):
        if index >= len(body):
            break
        if not mask.is_placeholder(char):
            continue
        if mask.is_placeholder(body[index]):
            break
        values.append(body[index])
    return mask.prefix + "".join(values)


def unmask_with_allowed_characters(mask: MaskPattern, raw_text: str) -> str:
    """Return the raw slot values with allowed pattern literals re-inserted."""

    if not mask.is_masking_enabled:
        return raw_text
    pending = deque(mask.strip_prefix(raw_text))
    output = [mask.prefix]
    for char in mask.pattern:
        if not mask.is_placeholder(char):
            if char in mask.allowed_characters:
                output.append(char)
        elif pending:
            output.append(pending.popleft())
    return "".join(output)


def normalise_raw_text(mask: MaskPattern, value: str) -> str:
    """Prepare ``value`` for storage as raw text.

    Allowed characters are removed as literal substrings and the prefix is
    guaranteed to lead the result.  Without masking the value is stored as-is.
    """

    if not mask.is_masking_enabled:
        return value
    body = mask.strip_prefix(value)
    for allowed in mask.allowed_characters:
        if allowed:
            body = body.replace(allowed, "")
    return mask.prefix + body


def is_finished(mask: MaskPattern, raw_text: str) -> bool:
    return len(raw_text) == mask.max_unmasked_length
