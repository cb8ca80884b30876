"""Discovery of installed formula templates."""

from __future__ import annotations

from pathlib import Path

from . import log, paths


def formula_name(filename: str) -> str | None:
    """Return the formula base name for a ``<name>.formula.toml`` filename.

    Example:
        >>> formula_name("mol-deacon-patrol.formula.toml")
        'mol-deacon-patrol'
        >>> formula_name(".installed.json") is None
        True
    """
    if not filename.endswith(paths.FORMULA_SUFFIX):
        return None
    return filename[: -len(paths.FORMULA_SUFFIX)]


def formula_names(root: Path) -> set[str] | None:
    """Collect the names of formulas installed under ``root/formulas``.

    Only regular files directly inside the directory count; subdirectories and
    files without the ``.formula.toml`` suffix are ignored.

    Args:
        root: Beads root expected to contain a ``formulas/`` directory.

    Returns:
        Set of formula base names, or ``None`` when the directory cannot be
        listed. Callers treat ``None`` as "no formulas known".
    """
    directory = paths.formulas_dir(root)
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        log.debug(f"formulas unavailable at {directory}: {exc}")
        return None
    names: set[str] = set()
    for entry in entries:
        name = formula_name(entry.name)
        if name is None or not entry.is_file():
            continue
        names.add(name)
    log.debug(f"found {len(names)} formula(s) in {directory}")
    return names
