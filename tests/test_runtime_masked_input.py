from __future__ import annotations

from maskedtext.edits import TextRange
from maskedtext.field import MaskedField
from maskedtext.runtime.masked_input import (
    FieldKeystroke,
    KeystrokeKind,
    apply_field_keystrokes,
    keystrokes_from_text,
)


def test_keystrokes_from_text_maps_backspace_and_delete() -> None:
    keystrokes = keystrokes_from_text("1\b2\x7f")

    assert [keystroke.kind for keystroke in keystrokes] == [
        KeystrokeKind.INSERT,
        KeystrokeKind.DELETE,
        KeystrokeKind.INSERT,
        KeystrokeKind.DELETE,
    ]
    assert keystrokes[0].text == "1"
    assert keystrokes[1].text == ""


def test_apply_field_keystrokes_tracks_cursor(phone_field: MaskedField) -> None:
    outcomes = apply_field_keystrokes(phone_field, keystrokes_from_text("12\x7f3"))

    assert [outcome.displayed_text for outcome in outcomes] == [
        "+68 1__/___/___",
        "+68 12_/___/___",
        "+68 1__/___/___",
        "+68 13_/___/___",
    ]
    assert [outcome.cursor_offset for outcome in outcomes] == [5, 6, 5, 6]
    assert all(outcome.accepted for outcome in outcomes)


def test_typing_skips_over_separators(phone_field: MaskedField) -> None:
    outcomes = apply_field_keystrokes(phone_field, keystrokes_from_text("1234"))

    assert outcomes[2].cursor_offset == 8
    assert outcomes[3].displayed_text == "+68 123/4__/___"


def test_typing_past_last_slot_keeps_value(phone_field: MaskedField) -> None:
    apply_field_keystrokes(phone_field, keystrokes_from_text("1234567890"))

    assert phone_field.raw_text == "+68123456789"
    assert phone_field.displayed_text == "+68 123/456/789"
    assert phone_field.is_finished


def test_backspace_at_prefix_boundary_is_rejected(phone_field: MaskedField) -> None:
    (outcome,) = apply_field_keystrokes(phone_field, [FieldKeystroke.delete()])

    assert not outcome.accepted
    assert phone_field.raw_text == "+68"


def test_explicit_location_overrides_cursor(phone_field: MaskedField) -> None:
    keystroke = FieldKeystroke.delete(location=1)

    assert keystroke.resolve_range(phone_field) == TextRange(1, 1)
    (outcome,) = apply_field_keystrokes(phone_field, [keystroke])
    assert not outcome.accepted


def test_paste_keystroke_uses_bulk_path(phone_field: MaskedField) -> None:
    (outcome,) = apply_field_keystrokes(phone_field, [FieldKeystroke.paste("111222333")])

    assert outcome.accepted
    assert outcome.raw_text == "+68111222333"
    assert outcome.displayed_text == "+68 111/222/333"


def test_keystrokes_without_masking_append_to_text() -> None:
    field = MaskedField()

    apply_field_keystrokes(field, keystrokes_from_text("ab\bc"))

    assert field.raw_text == "ac"
    assert FieldKeystroke.insert("x").resolve_range(field) == TextRange.caret(2)
