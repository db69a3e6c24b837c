"""Validate keystroke and paste edits proposed by a host text control."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from .engine import normalise_raw_text
from .pattern import MaskPattern

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class ReplacementTransformer(Protocol):
    """Host collaborator that rewrites pasted text before it is stored."""

    def replaced_text(self, text: str, content_type: Optional[str]) -> Optional[str]:
        """Return raw text for the bulk ``text`` or ``None`` to keep it."""


@dataclass(frozen=True)
class TextRange:
    """Half-open ``[location, location + length)`` span in displayed text."""

    location: int
    length: int = 0

    @property
    def end(self) -> int:
        return self.location + self.length

    @classmethod
    def caret(cls, location: int) -> "TextRange":
        return cls(location=location, length=0)

    def fits(self, text: str) -> bool:
        return 0 <= self.location and 0 <= self.length and self.end <= len(text)

    def clamp(self, text: str) -> "TextRange":
        """Return this range trimmed to the bounds of ``text``."""

        location = min(max(self.location, 0), len(text))
        end = min(max(self.end, location), len(text))
        return TextRange(location, end - location)

    def apply(self, text: str, replacement: str) -> str:
        return text[: self.location] + replacement + text[self.end:]


@dataclass(frozen=True)
class EditDecision:
    """Outcome of a proposed edit: host permission plus the new raw text."""

    accepted: bool
    raw_text: str


class EditAcceptor:
    """Apply the slot-filling edit policy to one proposed edit at a time."""

    def __init__(self, *, transformer: ReplacementTransformer | None = None) -> None:
        self.transformer = transformer

    def propose_edit(
        self,
        mask: MaskPattern,
        raw_text: str,
        displayed_text: str,
        text_range: TextRange,
        replacement: str,
        *,
        content_type: Optional[str] = None,
    ) -> EditDecision:
        if not mask.is_masking_enabled:
            # The host buffer is the raw text; apply the edit where it landed.
            if len(replacement) > 1:
                replacement = self._transform(replacement, content_type)
            edited = text_range.clamp(displayed_text).apply(displayed_text, replacement)
            return EditDecision(accepted=True, raw_text=edited)

        if len(replacement) > 1:
            value = self._transform(replacement, content_type)
            return EditDecision(accepted=True, raw_text=normalise_raw_text(mask, value))

        if not text_range.fits(displayed_text):
            LOGGER.debug(
                "rejecting edit outside displayed text: %r (length %d)",
                text_range,
                len(displayed_text),
            )
            return EditDecision(accepted=False, raw_text=raw_text)

        edited = text_range.apply(displayed_text, replacement)
        if not edited.startswith(mask.maximum_prefix):
            LOGGER.debug(
                "rejecting edit that breaks prefix %r: %r",
                mask.maximum_prefix,
                edited,
            )
            return EditDecision(accepted=False, raw_text=raw_text)

        if not replacement:
            return EditDecision(accepted=True, raw_text=self._pop_tail(mask, raw_text))
        if replacement in mask.allowed_characters:
            LOGGER.debug("ignoring allowed literal %r typed into a slot", replacement)
            return EditDecision(accepted=True, raw_text=raw_text)
        if len(raw_text) + 1 <= mask.max_unmasked_length:
            return EditDecision(accepted=True, raw_text=raw_text + replacement)
        LOGGER.debug("all %d slots filled; ignoring %r", mask.placeholder_count, replacement)
        return EditDecision(accepted=True, raw_text=raw_text)

    def _transform(self, replacement: str, content_type: Optional[str]) -> str:
        value = None
        if self.transformer is not None:
            value = self.transformer.replaced_text(replacement, content_type)
        if value is None:
            value = replacement
        return value

    def _pop_tail(self, mask: MaskPattern, raw_text: str) -> str:
        # Deletions always drop the newest slot value, wherever the host caret sits.
        if len(raw_text) <= len(mask.prefix):
            return raw_text
        return raw_text[:-1]


__all__ = [
    "EditAcceptor",
    "EditDecision",
    "ReplacementTransformer",
    "TextRange",
]
