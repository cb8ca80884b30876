"""Implementation for the ``beadwork ready`` command."""

from __future__ import annotations

import json
from pathlib import Path

from rich import box
from rich.table import Table

from .. import config, log, paths, readiness, store, wisps
from ..io import die, read_text_arg, say
from ..issues import Issue, load_issues_json
from ..models import READY_FORMAT_VALUES


def _normalize_format(value: str) -> str:
    normalized = value.strip().lower()
    if normalized not in READY_FORMAT_VALUES:
        die(f"--format must be one of: {', '.join(READY_FORMAT_VALUES)}")
    return normalized


def ready(args: object) -> None:
    """List dispatchable work after stripping scaffolds, molecules and wisps."""
    requested_format = getattr(args, "format", None)
    if requested_format:
        _normalize_format(str(requested_format))
    user_config = config.load_config()
    format_value = _normalize_format(str(requested_format or user_config.ready.format))

    cwd = Path.cwd()
    beads_dir = config.resolve_beads_dir(getattr(args, "beads_dir", None), user_config, cwd=cwd)
    issues = _load_issues(args, beads_dir=beads_dir, cwd=cwd, bd_path=user_config.beads.bd_path)
    wisp_ids = wisps.load_wisp_ids(paths.wisp_index_path(beads_dir))
    report = readiness.ready_report(issues, beads_dir, wisp_ids)
    log.debug(
        f"ready: {report.total} candidate(s), dropped {report.scaffolds_dropped} scaffold(s), "
        f"{report.molecules_dropped} molecule bead(s), {report.wisps_dropped} wisp(s)"
    )

    if format_value == "json":
        say(json.dumps(_report_payload(report, beads_dir), indent=2, sort_keys=True))
        return
    _render_table(report)


def _load_issues(args: object, *, beads_dir: Path, cwd: Path, bd_path: str) -> list[Issue]:
    issues_path = getattr(args, "issues", None)
    if issues_path:
        source = "stdin" if issues_path == "-" else str(issues_path)
        try:
            return load_issues_json(read_text_arg(issues_path), source=source)
        except ValueError as exc:
            die(str(exc))
    try:
        return store.list_ready_issues(beads_dir=beads_dir, cwd=cwd, bd_path=bd_path)
    except store.StoreError as exc:
        die(str(exc))


def _report_payload(report: readiness.ReadyReport, beads_dir: Path) -> dict[str, object]:
    formulas = sorted(report.formula_names) if report.formula_names is not None else None
    return {
        "beads_dir": str(beads_dir),
        "formulas": formulas,
        "counts": {
            "total": report.total,
            "ready": len(report.issues),
            "scaffolds": report.scaffolds_dropped,
            "molecules": report.molecules_dropped,
            "wisps": report.wisps_dropped,
        },
        "issues": [
            {"id": issue.id, "title": issue.title, "type": issue.type} for issue in report.issues
        ],
    }


def _render_table(report: readiness.ReadyReport) -> None:
    console = log.console()
    if not report.issues:
        console.print("No ready work.")
        return
    table = Table(box=box.SIMPLE, show_edge=False)
    table.add_column("ID", no_wrap=True)
    table.add_column("Type")
    table.add_column("Title")
    for issue in report.issues:
        table.add_row(issue.id, issue.type or "-", issue.title)
    console.print(table)
    console.print(f"{len(report.issues)} ready, {report.dropped} hidden", style="dim")
