"""Helpers that replay staged keystrokes into a masked field."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from ..edits import TextRange
from ..field import EditOutcome, MaskedField

__all__ = [
    "DELETE_KEYS",
    "FieldKeystroke",
    "KeystrokeKind",
    "apply_field_keystrokes",
    "keystrokes_from_text",
]

DELETE_KEYS = frozenset({"\b", "\x7f"})


class KeystrokeKind(Enum):
    """Edits a host control can report to the field."""

    INSERT = auto()
    DELETE = auto()
    PASTE = auto()


@dataclass(frozen=True)
class FieldKeystroke:
    """Descriptor for an edit staged against a masked field.

    ``location`` pins the edit to a displayed-text offset; when omitted the
    field's current cursor is used, the way a caret-driven control reports it.
    """

    kind: KeystrokeKind
    text: str = ""
    location: Optional[int] = None

    @classmethod
    def insert(cls, char: str, location: Optional[int] = None) -> "FieldKeystroke":
        return cls(KeystrokeKind.INSERT, char, location)

    @classmethod
    def delete(cls, location: Optional[int] = None) -> "FieldKeystroke":
        return cls(KeystrokeKind.DELETE, "", location)

    @classmethod
    def paste(cls, text: str) -> "FieldKeystroke":
        return cls(KeystrokeKind.PASTE, text)

    def resolve_range(self, field: MaskedField) -> TextRange:
        """Translate the keystroke into the range a host control would report."""

        caret = self.location
        if caret is None:
            caret = field.cursor_offset
        if caret is None:
            caret = len(field.displayed_text)
        if self.kind is KeystrokeKind.DELETE:
            if self.location is not None:
                return TextRange(caret, 1)
            if caret <= 0:
                return TextRange.caret(0)
            return TextRange(caret - 1, 1)
        if self.kind is KeystrokeKind.PASTE:
            return TextRange.caret(len(field.displayed_text))
        return TextRange.caret(caret)


def keystrokes_from_text(text: str) -> list[FieldKeystroke]:
    """Split typed ``text`` into single-key edits; backspace/DEL delete."""

    return [
        FieldKeystroke.delete() if char in DELETE_KEYS else FieldKeystroke.insert(char)
        for char in text
    ]


def apply_field_keystrokes(
    field: MaskedField,
    keystrokes: Iterable[FieldKeystroke],
) -> list[EditOutcome]:
    """Run ``keystrokes`` through ``field`` and collect each outcome."""

    outcomes: list[EditOutcome] = []
    for keystroke in keystrokes:
        text_range = keystroke.resolve_range(field)
        outcomes.append(field.apply_edit(text_range, keystroke.text))
    return outcomes
