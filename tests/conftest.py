# ruff: noqa: E402

import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import beadwork.log as beadwork_log

DOCTEST_MODULES = {
    ROOT / "src" / "beadwork" / "__init__.py",
    ROOT / "src" / "beadwork" / "config.py",
    ROOT / "src" / "beadwork" / "fields.py",
    ROOT / "src" / "beadwork" / "formulas.py",
    ROOT / "src" / "beadwork" / "issues.py",
    ROOT / "src" / "beadwork" / "models.py",
    ROOT / "src" / "beadwork" / "paths.py",
    ROOT / "src" / "beadwork" / "readiness.py",
    ROOT / "src" / "beadwork" / "wisps.py",
}


@pytest.fixture(autouse=True)
def _reset_log_state(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BEADWORK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("BEADS_DIR", raising=False)
    monkeypatch.setattr(beadwork_log, "_configured_level", None)
    monkeypatch.setattr(beadwork_log, "_no_color_override", None)


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
