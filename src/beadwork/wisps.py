"""Wisp sidecar index loading.

File-backed stores keep an ``issues.jsonl`` export next to the database. Each
line is one issue record; the records flagged as wisps (ephemeral workflow
steps) identify beads whose ids predate the ``-wisp-`` naming convention.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from . import log

WISP_ISSUE_TYPE = "wisp"


class WispIndexRecord(BaseModel):
    """One ``issues.jsonl`` record, reduced to the wisp classification."""

    model_config = ConfigDict(extra="ignore")

    id: str
    ephemeral: bool = False
    wisp: bool = False
    issue_type: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: object) -> object:
        if isinstance(value, str) and value.strip():
            return value.strip()
        raise ValueError("missing issue id")

    @field_validator("ephemeral", "wisp", mode="before")
    @classmethod
    def _normalize_flag(cls, value: object) -> object:
        if value is None:
            return False
        return value

    @property
    def is_wisp(self) -> bool:
        if self.ephemeral or self.wisp:
            return True
        return (self.issue_type or "").strip().lower() == WISP_ISSUE_TYPE


def parse_wisp_ids(lines: list[str], *, source: str) -> set[str]:
    """Return ids of wisp records from newline-delimited JSON lines.

    Blank lines, undecodable lines and records without an id are skipped.

    Example:
        >>> sorted(parse_wisp_ids(['{"id": "hq-a", "ephemeral": true}', '{"id": "hq-b"}'], source="doc"))
        ['hq-a']
    """
    ids: set[str] = set()
    for number, line in enumerate(lines, start=1):
        raw = line.strip()
        if not raw:
            continue
        try:
            record = WispIndexRecord.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            log.debug(f"skipping {source}:{number}: {exc}")
            continue
        if record.is_wisp:
            ids.add(record.id)
    return ids


def load_wisp_ids(path: Path) -> set[str] | None:
    """Load wisp ids from a sidecar index.

    Returns:
        Set of wisp ids, or ``None`` when the index is missing or unreadable.
        A missing index is normal for database-backed stores.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        log.debug(f"wisp index unavailable at {path}: {exc}")
        return None
    lines: list[str] = []
    for number, raw in enumerate(data.splitlines(), start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            log.debug(f"skipping {path}:{number}: {exc}")
            lines.append("")
    ids = parse_wisp_ids(lines, source=str(path))
    log.debug(f"loaded {len(ids)} wisp id(s) from {path}")
    return ids
