"""Readiness filtering for dispatchable work.

A ready listing from the store mixes real work with beads created for
structure: formula scaffolds, molecule instances and steps, periodic events,
and wisps. The filters here strip those out. Each filter returns a new list,
keeps input order, and is idempotent.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from pathlib import Path

from .formulas import formula_names
from .issues import Issue

MOLECULE_INFIX = "-mol-"
WISP_INFIX = "-wisp-"
EVENT_ISSUE_TYPE = "event"


def is_formula_scaffold(issue: Issue, names: Collection[str] | None) -> bool:
    """Return whether an issue is the root or a step bead of an installed formula.

    Roots carry the formula name as their id; steps use ``<formula>.<step>``.

    Example:
        >>> is_formula_scaffold(Issue(id="mol-deacon-patrol.inbox-check"), {"mol-deacon-patrol"})
        True
        >>> is_formula_scaffold(Issue(id="hq-cv.synthesis-step"), {"mol-deacon-patrol"})
        False
    """
    if not names:
        return False
    issue_id = issue.id
    if issue_id in names:
        return True
    return any(issue_id.startswith(name + ".") for name in names)


def is_molecule_bead(issue: Issue) -> bool:
    """Return whether an issue is a molecule instance/step bead or an event."""
    return MOLECULE_INFIX in issue.id or issue.type == EVENT_ISSUE_TYPE


def is_wisp(issue: Issue, wisp_ids: Collection[str] | None = None) -> bool:
    """Return whether an issue is a wisp, by id pattern or by index membership."""
    if WISP_INFIX in issue.id:
        return True
    return wisp_ids is not None and issue.id in wisp_ids


def filter_formula_scaffolds(
    issues: Sequence[Issue], names: Collection[str] | None
) -> list[Issue]:
    """Drop formula scaffold beads; unchanged when no formulas are known."""
    if not names:
        return list(issues)
    return [issue for issue in issues if not is_formula_scaffold(issue, names)]


def filter_molecule_beads(issues: Sequence[Issue]) -> list[Issue]:
    """Drop molecule beads (``-mol-`` ids) and events.

    Wisps pass through; ``filter_wisps`` removes them.
    """
    return [issue for issue in issues if not is_molecule_bead(issue)]


def filter_wisps(issues: Sequence[Issue], wisp_ids: Collection[str] | None) -> list[Issue]:
    """Drop wisps by the ``-wisp-`` id pattern, plus any id in ``wisp_ids``.

    ``wisp_ids`` is ``None`` when no sidecar index exists; the pattern still
    applies.
    """
    return [issue for issue in issues if not is_wisp(issue, wisp_ids)]


@dataclass(frozen=True)
class ReadyReport:
    """Result of the readiness pipeline with per-stage drop counts."""

    total: int
    issues: tuple[Issue, ...]
    formula_names: frozenset[str] | None
    scaffolds_dropped: int
    molecules_dropped: int
    wisps_dropped: int

    @property
    def dropped(self) -> int:
        return self.total - len(self.issues)


def ready_report(
    issues: Sequence[Issue],
    formulas_root: Path | None,
    wisp_index: Collection[str] | None,
) -> ReadyReport:
    """Run the readiness pipeline and keep track of what each stage removed.

    Args:
        issues: Snapshot of candidate issues.
        formulas_root: Beads root holding ``formulas/``; ``None`` skips the
            scaffold stage.
        wisp_index: Known wisp ids, or ``None`` when no index is available.
    """
    names = formula_names(formulas_root) if formulas_root is not None else None
    without_scaffolds = filter_formula_scaffolds(issues, names)
    without_molecules = filter_molecule_beads(without_scaffolds)
    remaining = filter_wisps(without_molecules, wisp_index)
    return ReadyReport(
        total=len(issues),
        issues=tuple(remaining),
        formula_names=frozenset(names) if names is not None else None,
        scaffolds_dropped=len(issues) - len(without_scaffolds),
        molecules_dropped=len(without_scaffolds) - len(without_molecules),
        wisps_dropped=len(without_molecules) - len(remaining),
    )


def ready(
    issues: Sequence[Issue],
    formulas_root: Path | None,
    wisp_index: Collection[str] | None,
) -> list[Issue]:
    """Return the dispatchable subset of ``issues`` in input order."""
    return list(ready_report(issues, formulas_root, wisp_index).issues)
