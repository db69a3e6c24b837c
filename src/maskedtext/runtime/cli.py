"""Command-line front end that drives a single masked field."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import IO, Sequence

from ..config import FieldConfig, FieldConfigError, load_field_config
from ..field import MaskedField
from .masked_input import FieldKeystroke, apply_field_keystrokes, keystrokes_from_text

LOGGER = logging.getLogger(__name__)

PROMPT = "> "
PASTE_COMMAND = ":paste"
DELETE_COMMAND = ":del"
SET_COMMAND = ":set"
QUIT_COMMANDS = frozenset({":q", ":quit"})


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the masked field CLI."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file with a [field] table",
    )
    parser.add_argument("--pattern", default=None, help="Mask pattern, e.g. ' ___/___/___'")
    parser.add_argument("--placeholder", default=None, help="Placeholder slot character")
    parser.add_argument("--prefix", default=None, help="Fixed prefix kept ahead of the mask")
    parser.add_argument(
        "--allow",
        dest="allowed_characters",
        action="append",
        default=None,
        help="Pattern literal echoed into the unmasked view (repeatable)",
    )
    parser.add_argument("--content-type", default=None, help="Hint passed to paste handlers")
    parser.add_argument("--value", default=None, help="Initial raw text assigned to the field")
    parser.add_argument(
        "--keys",
        default="",
        help="Characters typed one at a time; backspace or DEL deletes",
    )
    parser.add_argument("--paste", default=None, help="Text pasted in one bulk edit")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Read edits from standard input line by line",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Emit the final field state as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity for the CLI",
    )
    return parser.parse_args(argv)


def resolve_field_config(args: argparse.Namespace) -> FieldConfig:
    """Merge an optional TOML file with command-line overrides."""

    config = FieldConfig()
    if args.config is not None:
        config = load_field_config(args.config)
    overrides: dict[str, object] = {}
    for name in ("pattern", "placeholder", "prefix", "content_type", "value"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.allowed_characters is not None:
        overrides["allowed_characters"] = tuple(args.allowed_characters)
    return replace(config, **overrides)


def describe_field(field: MaskedField) -> dict[str, object]:
    return {
        "displayed_text": field.displayed_text,
        "raw_text": field.raw_text,
        "unmasked_text_with_allowed_characters": field.unmasked_text_with_allowed_characters,
        "cursor_offset": field.cursor_offset,
        "is_finished": field.is_finished,
    }


def format_field(field: MaskedField) -> str:
    cursor = field.cursor_offset
    marker = "" if cursor is None else f" @{cursor}"
    return (
        f"{field.displayed_text!r}{marker} raw={field.raw_text!r}"
        f" unmasked={field.unmasked_text_with_allowed_characters!r}"
        f"{' [finished]' if field.is_finished else ''}"
    )


def _write_and_flush(stream: IO[str], text: str) -> None:
    stream.write(text)
    stream.flush()


def handle_command(field: MaskedField, line: str) -> bool:
    """Apply one interactive ``line``; return ``False`` when the session ends."""

    command = line.rstrip("\r\n")
    if command in QUIT_COMMANDS:
        return False
    if command.startswith(PASTE_COMMAND + " "):
        apply_field_keystrokes(field, [FieldKeystroke.paste(command[len(PASTE_COMMAND) + 1:])])
    elif command == DELETE_COMMAND or command.startswith(DELETE_COMMAND + " "):
        count_text = command[len(DELETE_COMMAND):].strip() or "1"
        try:
            count = int(count_text, 10)
        except ValueError:
            LOGGER.warning("ignoring invalid delete count %r", count_text)
            return True
        apply_field_keystrokes(field, [FieldKeystroke.delete() for _ in range(count)])
    elif command.startswith(SET_COMMAND + " "):
        field.raw_text = command[len(SET_COMMAND) + 1:]
    else:
        apply_field_keystrokes(field, keystrokes_from_text(command))
    return True


def drive_field(
    field: MaskedField,
    *,
    input_stream: IO[str] | None = None,
    output_stream: IO[str] | None = None,
) -> MaskedField:
    """Drive ``field`` from ``input_stream`` until EOF or a quit command."""

    input_stream = input_stream or sys.stdin
    output_stream = output_stream or sys.stdout
    _write_and_flush(output_stream, format_field(field) + "\n")
    while True:
        _write_and_flush(output_stream, PROMPT)
        line = input_stream.readline()
        if not line:
            break
        if not handle_command(field, line):
            break
        _write_and_flush(output_stream, format_field(field) + "\n")
    return field


def build_field(args: argparse.Namespace) -> MaskedField:
    try:
        config = resolve_field_config(args)
        return config.build_field()
    except FieldConfigError as exc:
        raise SystemExit(f"invalid field configuration: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``maskedtext`` console script."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    field = build_field(args)
    LOGGER.info("configured %r", field)
    if args.keys:
        apply_field_keystrokes(field, keystrokes_from_text(args.keys))
    if args.paste is not None:
        apply_field_keystrokes(field, [FieldKeystroke.paste(args.paste)])
    if args.interactive:
        drive_field(field)

    if args.as_json:
        print(json.dumps(describe_field(field), indent=2, sort_keys=True))
    elif not args.interactive:
        print(format_field(field))
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())


__all__ = [
    "build_field",
    "describe_field",
    "drive_field",
    "format_field",
    "handle_command",
    "main",
    "parse_args",
    "resolve_field_config",
]
