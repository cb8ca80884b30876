"""Structured ``key: value`` fields embedded in bead descriptions.

Three record kinds share one description: agent state, pinned attachment
metadata, and merge-request metadata. Each kind owns a fixed key set and
ignores every other line, so the kinds can coexist next to free-form prose.

Keys compare case-insensitively and accept ``snake_case``, ``kebab-case`` and
flat spellings (``hook_bead``, ``hook-bead``, ``hookbead``). Records are always
written back in canonical ``snake_case`` order.

Example:
    >>> fields = parse_mr_fields_from_description("branch: foo\\n\\nSome prose.")
    >>> fields.branch
    'foo'
    >>> format_mr_fields(MRFields(branch="foo", target="main"))
    'branch: foo\\ntarget: main'
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields as dataclass_fields
from typing import Generic, TypeVar

from .issues import Issue

_NULL_VALUE = "null"


@dataclass(frozen=True)
class AgentFields:
    """Agent state stored on an agent bead.

    Attributes:
        role_type: Agent role (mayor, deacon, witness, refinery, polecat).
        rig: Rig the agent belongs to.
        agent_state: Lifecycle state (idle, running, working, stopped).
        hook_bead: Bead currently on the agent's hook.
        role_bead: Bead holding the role definition.
    """

    role_type: str | None = None
    rig: str | None = None
    agent_state: str | None = None
    hook_bead: str | None = None
    role_bead: str | None = None


@dataclass(frozen=True)
class AttachmentFields:
    """Molecule attachment recorded on a pinned or handoff bead.

    Attributes:
        attached_molecule: Root bead id of the attached molecule.
        attached_at: ISO-8601 timestamp of the attachment.
        attached_args: Natural-language arguments passed at sling time.
    """

    attached_molecule: str | None = None
    attached_at: str | None = None
    attached_args: str | None = None


@dataclass(frozen=True)
class MRFields:
    """Merge-request metadata stored on a merge-request bead.

    Attributes:
        branch: Source branch (e.g. ``polecat/Nux/gt-xyz``).
        target: Target branch (e.g. ``main``).
        source_issue: Work item being merged.
        worker: Who did the work.
        rig: Rig the work came from.
        merge_commit: SHA of the merge commit, set on close.
        close_reason: merged, rejected, conflict or superseded.
    """

    branch: str | None = None
    target: str | None = None
    source_issue: str | None = None
    worker: str | None = None
    rig: str | None = None
    merge_commit: str | None = None
    close_reason: str | None = None


RecordT = TypeVar("RecordT", AgentFields, AttachmentFields, MRFields)


def _key_spellings(canonical: str) -> tuple[str, ...]:
    spellings = [canonical]
    for variant in (canonical.replace("_", "-"), canonical.replace("_", "")):
        if variant not in spellings:
            spellings.append(variant)
    return tuple(spellings)


def split_field_line(line: str) -> tuple[str, str] | None:
    """Split a description line into a ``(key, value)`` pair.

    Returns ``None`` for blank lines and lines without a colon. The key is
    lower-cased; both parts are stripped.

    Example:
        >>> split_field_line("  Hook-Bead :  gt-123 ")
        ('hook-bead', 'gt-123')
        >>> split_field_line("just prose") is None
        True
    """
    stripped = line.strip()
    if not stripped or ":" not in stripped:
        return None
    key, value = stripped.split(":", 1)
    return key.strip().lower(), value.strip()


class FieldCodec(Generic[RecordT]):
    """Parse, format and replace one record kind inside descriptions."""

    def __init__(
        self,
        name: str,
        record_type: type[RecordT],
        *,
        null_is_absent: bool = False,
    ) -> None:
        self.name = name
        self.record_type = record_type
        self.null_is_absent = null_is_absent
        self.canonical_keys: tuple[str, ...] = tuple(
            field.name for field in dataclass_fields(record_type)
        )
        aliases: dict[str, str] = {}
        for canonical in self.canonical_keys:
            for spelling in _key_spellings(canonical):
                aliases[spelling] = canonical
        self._aliases = aliases

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(self._aliases)

    def canonical_key(self, key: str) -> str | None:
        return self._aliases.get(key.strip().lower())

    def _iter_values(self, description: str) -> Iterator[tuple[str, str]]:
        for line in description.split("\n"):
            parts = split_field_line(line)
            if parts is None:
                continue
            key, value = parts
            canonical = self._aliases.get(key)
            if canonical is None or not value:
                continue
            if self.null_is_absent and value.lower() == _NULL_VALUE:
                continue
            yield canonical, value

    def parse_description(self, description: str | None) -> RecordT | None:
        if not description:
            return None
        values: dict[str, str] = {}
        for canonical, value in self._iter_values(description):
            values[canonical] = value
        if not values:
            return None
        return self.record_type(**values)

    def parse(self, issue: Issue | None) -> RecordT | None:
        if issue is None or not issue.description:
            return None
        return self.parse_description(issue.description)

    def format(self, record: RecordT | None) -> str:
        if record is None:
            return ""
        lines: list[str] = []
        for canonical in self.canonical_keys:
            value = getattr(record, canonical)
            if value:
                lines.append(f"{canonical}: {value}")
        return "\n".join(lines)

    def _other_lines(self, description: str) -> list[str]:
        other: list[str] = []
        for line in description.split("\n"):
            parts = split_field_line(line)
            if parts is not None and parts[0] in self._aliases:
                continue
            other.append(line)
        while other and not other[-1].strip():
            other.pop()
        while other and not other[0].strip():
            other.pop(0)
        return other

    def set_description(self, description: str | None, record: RecordT | None) -> str:
        other = self._other_lines(description) if description else []
        formatted = self.format(record)
        if not formatted:
            return "\n".join(other)
        if not other:
            return formatted
        return formatted + "\n\n" + "\n".join(other)

    def set(self, issue: Issue | None, record: RecordT | None) -> str:
        description = issue.description if issue is not None else ""
        return self.set_description(description, record)

    def from_mapping(self, values: Mapping[str, str | None]) -> RecordT:
        """Build a record from canonical or alias key names.

        Raises:
            ValueError: When a key is not recognized for this record kind.
        """
        resolved: dict[str, str | None] = {}
        for key, value in values.items():
            canonical = self.canonical_key(key)
            if canonical is None:
                allowed = ", ".join(self.canonical_keys)
                raise ValueError(f"unknown {self.name} field {key!r} (expected one of: {allowed})")
            resolved[canonical] = value.strip() if isinstance(value, str) else value
        return self.record_type(**resolved)


AGENT_CODEC = FieldCodec("agent", AgentFields, null_is_absent=True)
ATTACHMENT_CODEC = FieldCodec("attachment", AttachmentFields)
MR_CODEC = FieldCodec("mr", MRFields)

FIELD_KINDS: Mapping[str, FieldCodec] = {
    AGENT_CODEC.name: AGENT_CODEC,
    ATTACHMENT_CODEC.name: ATTACHMENT_CODEC,
    MR_CODEC.name: MR_CODEC,
}


def codec_for(kind: str) -> FieldCodec:
    """Return the codec registered for a record kind name.

    Raises:
        ValueError: When ``kind`` is not a known record kind.
    """
    normalized = kind.strip().lower()
    codec = FIELD_KINDS.get(normalized)
    if codec is None:
        raise ValueError(
            f"unknown field kind {kind!r} (expected one of: {', '.join(FIELD_KINDS)})"
        )
    return codec


def record_from_mapping(
    kind: str, values: Mapping[str, str | None]
) -> AgentFields | AttachmentFields | MRFields:
    """Build a record of the named kind; see ``FieldCodec.from_mapping``."""
    return codec_for(kind).from_mapping(values)


def parse_agent_fields(issue: Issue | None) -> AgentFields | None:
    """Extract agent fields from an issue; ``None`` when none are present."""
    return AGENT_CODEC.parse(issue)


def parse_agent_fields_from_description(description: str | None) -> AgentFields | None:
    """Extract agent fields from a description string.

    A value of ``null`` (any case) counts as absent for agent fields only.

    Example:
        >>> parse_agent_fields_from_description("rig: null\\nhook_bead: gt-1")
        AgentFields(role_type=None, rig=None, agent_state=None, hook_bead='gt-1', role_bead=None)
    """
    return AGENT_CODEC.parse_description(description)


def format_agent_fields(fields: AgentFields | None) -> str:
    return AGENT_CODEC.format(fields)


def set_agent_fields(issue: Issue | None, fields: AgentFields | None) -> str:
    """Return the issue description with its agent fields replaced."""
    return AGENT_CODEC.set(issue, fields)


def agent_field_keys() -> frozenset[str]:
    return AGENT_CODEC.keys


def parse_attachment_fields(issue: Issue | None) -> AttachmentFields | None:
    """Extract attachment fields from an issue; ``None`` when none are present."""
    return ATTACHMENT_CODEC.parse(issue)


def parse_attachment_fields_from_description(
    description: str | None,
) -> AttachmentFields | None:
    return ATTACHMENT_CODEC.parse_description(description)


def format_attachment_fields(fields: AttachmentFields | None) -> str:
    return ATTACHMENT_CODEC.format(fields)


def set_attachment_fields(issue: Issue | None, fields: AttachmentFields | None) -> str:
    """Return the issue description with its attachment fields replaced.

    Existing attachment lines are dropped wherever they appear; the new block
    is written first, followed by one blank line and the remaining content.
    """
    return ATTACHMENT_CODEC.set(issue, fields)


def attachment_field_keys() -> frozenset[str]:
    return ATTACHMENT_CODEC.keys


def parse_mr_fields(issue: Issue | None) -> MRFields | None:
    """Extract merge-request fields from an issue; ``None`` when none are present."""
    return MR_CODEC.parse(issue)


def parse_mr_fields_from_description(description: str | None) -> MRFields | None:
    return MR_CODEC.parse_description(description)


def format_mr_fields(fields: MRFields | None) -> str:
    return MR_CODEC.format(fields)


def set_mr_fields(issue: Issue | None, fields: MRFields | None) -> str:
    """Return the issue description with its merge-request fields replaced."""
    return MR_CODEC.set(issue, fields)


def mr_field_keys() -> frozenset[str]:
    return MR_CODEC.keys
