"""Configuration helpers for Beadwork.

This module reads ``config.user.json``, validates it with Pydantic
models, and resolves the beads directory from CLI overrides, the environment
and the config file.

Example:
    >>> from pathlib import Path
    >>> load_config(Path("missing.json")).beads.bd_path
    'bd'
"""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from . import paths
from .io import die
from .models import BeadworkConfig

BEADS_DIR_ENV = "BEADS_DIR"


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.
    """
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def load_config(path: Path | None = None) -> BeadworkConfig:
    """Load and validate the user config, falling back to defaults.

    Args:
        path: Config file path; defaults to ``paths.config_path()``.

    Returns:
        Validated ``BeadworkConfig``. A missing file yields defaults; an
        unreadable or invalid file exits with an error.
    """
    target = path or paths.config_path()
    try:
        payload = load_json(target)
    except (OSError, json.JSONDecodeError) as exc:
        die(f"failed to read config {target}: {exc}")
    if payload is None:
        return BeadworkConfig()
    try:
        return BeadworkConfig.model_validate(payload)
    except ValidationError as exc:
        die(f"invalid config {target}: {exc}")


def resolve_beads_dir(
    override: str | None,
    config: BeadworkConfig,
    *,
    cwd: Path,
    environ: dict[str, str] | None = None,
) -> Path:
    """Resolve the beads directory.

    Order: explicit override, ``BEADS_DIR``, config ``beads.dir``, then
    ``<cwd>/.beads``.

    Example:
        >>> resolve_beads_dir(None, BeadworkConfig(), cwd=Path("/town"), environ={}).as_posix()
        '/town/.beads'
    """
    env = os.environ if environ is None else environ
    for candidate in (override, env.get(BEADS_DIR_ENV), config.beads.dir):
        if isinstance(candidate, str) and candidate.strip():
            return Path(candidate.strip()).expanduser()
    return paths.default_beads_dir(cwd)
