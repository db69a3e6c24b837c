"""Stateful masked field that host text controls delegate their edits to."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Protocol

from .cursor import compute_cursor_offset
from .edits import EditAcceptor, ReplacementTransformer, TextRange
from .engine import is_finished, normalise_raw_text, render, unmask_with_allowed_characters
from .pattern import DEFAULT_PLACEHOLDER, ConfigError, MaskPattern

LOGGER = logging.getLogger(__name__)

ValueChangedCallback = Callable[["MaskedField"], None]


class EditAuthorityError(ConfigError):
    """Raised when a second edit authority is bound to a field."""


class TextHost(Protocol):
    """Adapter surface of the host control that displays the field.

    ``set_cursor`` is optional; hosts without an addressable caret omit it.
    """

    def set_text(self, text: str) -> None:
        """Replace the host's visible text."""


@dataclass(frozen=True)
class EditOutcome:
    """Snapshot returned by :meth:`MaskedField.apply_edit`."""

    accepted: bool
    displayed_text: str
    raw_text: str
    cursor_offset: Optional[int]


class MaskedField:
    """Own the raw text of one masked input and keep the host in sync."""

    def __init__(
        self,
        *,
        pattern: str = "",
        placeholder: str = DEFAULT_PLACEHOLDER,
        prefix: str = "",
        allowed_characters: Iterable[str] = (),
        content_type: Optional[str] = None,
        transformer: ReplacementTransformer | None = None,
        host: TextHost | None = None,
    ) -> None:
        self._mask = MaskPattern(
            pattern=pattern,
            placeholder=placeholder,
            prefix=prefix,
            allowed_characters=tuple(allowed_characters),
        )
        self._acceptor = EditAcceptor(transformer=transformer)
        self._subscribers: List[ValueChangedCallback] = []
        self.content_type = content_type
        self.host = host
        self._raw_text = self._mask.prefix

    # Configuration -------------------------------------------------------

    @property
    def mask(self) -> MaskPattern:
        return self._mask

    @property
    def transformer(self) -> ReplacementTransformer | None:
        return self._acceptor.transformer

    @transformer.setter
    def transformer(self, value: ReplacementTransformer | None) -> None:
        self._acceptor.transformer = value

    def set_pattern(self, pattern: str, placeholder: Optional[str] = None) -> None:
        """Install ``pattern`` and reset the raw text to the prefix."""

        if placeholder is None:
            placeholder = self._mask.placeholder
        self._mask = self._mask.set_pattern(pattern, placeholder)
        self._reset_raw_text()

    def set_placeholder(self, placeholder: str) -> None:
        self.set_pattern(self._mask.pattern, placeholder)

    def set_prefix(self, prefix: str) -> None:
        """Install ``prefix`` and reset the raw text to it."""

        self._mask = self._mask.set_prefix(prefix)
        self._reset_raw_text()

    def set_allowed_characters(self, characters: Iterable[str]) -> None:
        self._mask = self._mask.with_allowed_characters(characters)

    def bind_edit_authority(self, authority: object) -> None:
        """Confirm ``authority`` is this field; anything else is refused."""

        if authority is self or authority is self._acceptor:
            return
        LOGGER.debug("refusing edit authority %r for %r", authority, self)
        raise EditAuthorityError(
            "a masked field is its own edit authority; route edits through propose_edit"
        )

    # Derived views -------------------------------------------------------

    @property
    def is_masking_enabled(self) -> bool:
        return self._mask.is_masking_enabled

    @property
    def maximum_prefix(self) -> str:
        return self._mask.maximum_prefix

    @property
    def max_unmasked_length(self) -> int:
        return self._mask.max_unmasked_length

    @property
    def raw_text(self) -> str:
        return self._raw_text

    @raw_text.setter
    def raw_text(self, value: str) -> None:
        self._raw_text = normalise_raw_text(self._mask, value)
        self.editing_changed()

    @property
    def displayed_text(self) -> str:
        return render(self._mask, self._raw_text)

    @property
    def unmasked_text_with_allowed_characters(self) -> str:
        return unmask_with_allowed_characters(self._mask, self._raw_text)

    @property
    def cursor_offset(self) -> Optional[int]:
        return compute_cursor_offset(self._mask, self._raw_text)

    @property
    def is_finished(self) -> bool:
        return is_finished(self._mask, self._raw_text)

    # Editing -------------------------------------------------------------

    def propose_edit(
        self, displayed_text: str, text_range: TextRange, replacement: str
    ) -> bool:
        """Validate a host edit and update the raw text when it is accepted.

        The host should only mutate its own buffer when this returns ``True``
        and then call :meth:`editing_changed`.
        """

        decision = self._acceptor.propose_edit(
            self._mask,
            self._raw_text,
            displayed_text,
            text_range,
            replacement,
            content_type=self.content_type,
        )
        self._raw_text = decision.raw_text
        return decision.accepted

    def apply_edit(self, text_range: TextRange, replacement: str) -> EditOutcome:
        """Run a full propose/re-render/cursor cycle against the field itself."""

        accepted = self.propose_edit(self.displayed_text, text_range, replacement)
        if accepted:
            self.editing_changed()
        return EditOutcome(
            accepted=accepted,
            displayed_text=self.displayed_text,
            raw_text=self._raw_text,
            cursor_offset=self.cursor_offset,
        )

    def editing_changed(self) -> None:
        """Push the rendered text and cursor to the host and notify observers."""

        self._sync_text()
        self._sync_cursor()
        self._notify()

    # Host lifecycle hooks --------------------------------------------------

    def focus(self) -> None:
        self._sync_cursor()

    def did_begin_editing(self) -> None:
        self._sync_text()
        self._sync_cursor()

    def did_change_selection(self) -> None:
        self._sync_cursor()

    # Observers -----------------------------------------------------------

    def subscribe(self, callback: ValueChangedCallback) -> Callable[[], None]:
        """Register ``callback`` for value changes; return an unsubscribe hook."""

        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    # Internal helpers ----------------------------------------------------

    def _reset_raw_text(self) -> None:
        LOGGER.debug("resetting raw text to prefix %r", self._mask.prefix)
        self.raw_text = self._mask.prefix

    def _sync_text(self) -> None:
        if self.host is not None:
            self.host.set_text(self.displayed_text)

    def _sync_cursor(self) -> None:
        offset = self.cursor_offset
        if offset is None or self.host is None:
            return
        set_cursor = getattr(self.host, "set_cursor", None)
        if set_cursor is not None:
            set_cursor(offset)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    def __repr__(self) -> str:
        return (
            f"MaskedField(pattern={self._mask.pattern!r}, prefix={self._mask.prefix!r},"
            f" raw_text={self._raw_text!r})"
        )


__all__ = [
    "EditAuthorityError",
    "EditOutcome",
    "MaskedField",
    "TextHost",
    "ValueChangedCallback",
]
