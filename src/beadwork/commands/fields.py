"""Implementation for the ``beadwork fields`` commands."""

from __future__ import annotations

import json
from dataclasses import asdict

from .. import fields
from ..io import die, read_text_arg, say

_FORMATS = ("json", "text")
_FIELD_KEYS = {
    "agent": fields.agent_field_keys,
    "attachment": fields.attachment_field_keys,
    "mr": fields.mr_field_keys,
}


def _codec(args: object) -> fields.FieldCodec:
    try:
        return fields.codec_for(str(getattr(args, "kind", "") or ""))
    except ValueError as exc:
        die(str(exc))


def parse_fields(args: object) -> None:
    """Print the record of one kind parsed from a description."""
    codec = _codec(args)
    format_value = str(getattr(args, "format", "json") or "json").strip().lower()
    if format_value not in _FORMATS:
        die(f"--format must be one of: {', '.join(_FORMATS)}")
    description = read_text_arg(getattr(args, "path", None))
    record = codec.parse_description(description)
    if format_value == "text":
        formatted = codec.format(record)
        if formatted:
            say(formatted)
        return
    payload = None
    if record is not None:
        payload = {key: value for key, value in asdict(record).items() if value}
    say(json.dumps(payload, indent=2, sort_keys=True))


def _parse_assignments(values: list[str]) -> dict[str, str]:
    assignments: dict[str, str] = {}
    for value in values:
        if "=" not in value:
            die(f"expected key=value, got {value!r}")
        key, raw = value.split("=", 1)
        if not key.strip():
            die(f"expected key=value, got {value!r}")
        assignments[key.strip()] = raw.strip()
    return assignments


def set_fields(args: object) -> None:
    """Print a description with one record kind replaced or cleared.

    ``--field`` values merge into the record already present; an empty value
    removes that field.
    """
    codec = _codec(args)
    assignments = list(getattr(args, "field", None) or [])
    clear = bool(getattr(args, "clear", False))
    if clear and assignments:
        die("cannot combine --clear and --field")
    if not clear and not assignments:
        die("provide at least one --field or --clear")
    description = read_text_arg(getattr(args, "path", None)).rstrip("\n")

    record = None
    if not clear:
        parsed = _parse_assignments(assignments)
        try:
            updates = fields.record_from_mapping(codec.name, parsed)
        except ValueError as exc:
            die(str(exc))
        current = codec.parse_description(description)
        merged = asdict(current) if current is not None else {}
        for key in parsed:
            canonical = codec.canonical_key(key)
            merged[canonical] = getattr(updates, canonical) or None
        record = codec.record_type(**merged)
    say(codec.set_description(description, record))


def list_field_keys(args: object) -> None:
    """Print every accepted key spelling for one record kind, one per line."""
    codec = _codec(args)
    for key in sorted(_FIELD_KEYS[codec.name]()):
        say(key)
