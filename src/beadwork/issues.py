"""Pydantic boundary for issue payloads read from the beads store."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


def _clean_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


class Issue(BaseModel):
    """Validated issue payload consumed by the field codec and readiness filters.

    Only ``id``, ``title``, ``type`` and ``description`` are read; any other
    keys from the store are kept as extras.

    Example:
        >>> Issue(id="gt-1", type="task").id
        'gt-1'
        >>> Issue.model_validate({"id": "gt-2", "issue_type": "event"}).type
        'event'
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    type: str = Field(default="", alias="issue_type")
    description: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: object) -> object:
        normalized = _clean_str(value)
        if normalized is None:
            raise ValueError("missing issue id")
        return normalized

    @field_validator("title", mode="before")
    @classmethod
    def _normalize_title(cls, value: object) -> object:
        if value is None:
            return ""
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: object) -> object:
        return _clean_str(value) or ""

    @field_validator("description", mode="before")
    @classmethod
    def _normalize_description(cls, value: object) -> object:
        if value is None:
            return ""
        return value


def parse_issue(raw: dict[str, object], *, source: str) -> Issue:
    """Validate one store payload into an ``Issue``.

    Both the store's ``issue_type`` key and a plain ``type`` key are accepted.

    Raises:
        ValueError: When the payload fails validation; ``source`` names the
            payload in the message.
    """
    payload = dict(raw)
    if "issue_type" not in payload and "type" in payload:
        payload["issue_type"] = payload.pop("type")
    try:
        return Issue.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"invalid issue payload ({source}): {exc}") from exc


def parse_issues(payload: object, *, source: str) -> list[Issue]:
    """Validate a list (or single mapping) of store payloads."""
    if isinstance(payload, dict):
        return [parse_issue(payload, source=source)]
    if not isinstance(payload, list):
        raise ValueError(f"invalid issue payload ({source}): expected a JSON list")
    issues: list[Issue] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            continue
        issues.append(parse_issue(item, source=f"{source}[{index}]"))
    return issues


def load_issues_json(text: str, *, source: str) -> list[Issue]:
    """Decode JSON text (as printed by ``bd ... --json``) into issues.

    Example:
        >>> [issue.id for issue in load_issues_json('[{"id": "hq-1"}]', source="doc")]
        ['hq-1']
        >>> load_issues_json("  ", source="doc")
        []
    """
    raw = text.strip()
    if not raw:
        return []
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"failed to parse issue json ({source}): {exc}") from exc
    return parse_issues(payload, source=source)
