"""Read-only queries against the beads issue store via the ``bd`` CLI."""

from __future__ import annotations

import os
from pathlib import Path

from . import exec, log
from .issues import Issue, load_issues_json

_READY_TIMEOUT_SECONDS = 60.0


class StoreError(RuntimeError):
    """Raised when the store cannot be queried or returns unusable output."""


def beads_env(beads_dir: Path) -> dict[str, str]:
    """Return the environment for ``bd`` pointed at a beads directory.

    Example:
        >>> beads_env(Path("/town/.beads"))["BEADS_DIR"]
        '/town/.beads'
    """
    env = dict(os.environ)
    env["BEADS_DIR"] = str(beads_dir)
    return env


def run_bd_json(
    args: list[str],
    *,
    beads_dir: Path,
    cwd: Path,
    bd_path: str = "bd",
    runner: exec.CommandRunner | None = None,
) -> list[Issue]:
    """Run a ``bd`` query with ``--json`` and validate the returned issues.

    Raises:
        StoreError: When ``bd`` is missing, exits non-zero, or prints
            output that is not an issue list.
    """
    argv = [bd_path, *args]
    if "--json" not in argv:
        argv.append("--json")
    request = exec.CommandRequest(
        argv=tuple(argv),
        cwd=cwd,
        env=beads_env(beads_dir),
        timeout_seconds=_READY_TIMEOUT_SECONDS,
    )
    log.debug(f"running {' '.join(argv)}")
    result = exec.run_with_runner(request, runner=runner)
    if result is None:
        raise StoreError(f"missing required command: {bd_path}")
    if result.returncode != 0:
        raise StoreError(exec.command_failure_detail(request, result))
    try:
        return load_issues_json(result.stdout, source=" ".join(args))
    except ValueError as exc:
        raise StoreError(str(exc)) from exc


def list_ready_issues(
    *,
    beads_dir: Path,
    cwd: Path,
    bd_path: str = "bd",
    runner: exec.CommandRunner | None = None,
) -> list[Issue]:
    """Return the store's unblocked open issues (``bd ready``)."""
    return run_bd_json(["ready"], beads_dir=beads_dir, cwd=cwd, bd_path=bd_path, runner=runner)
