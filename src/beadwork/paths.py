"""Path helpers for locating Beadwork data directories and bead sidecar files."""

from pathlib import Path

from platformdirs import user_data_dir

BEADWORK_APP_NAME = "beadwork"
BEADS_DIRNAME = ".beads"
FORMULAS_DIRNAME = "formulas"
FORMULA_SUFFIX = ".formula.toml"
WISP_INDEX_FILENAME = "issues.jsonl"
CONFIG_USER_FILENAME = "config.user.json"


def beadwork_data_dir() -> Path:
    """Return the base Beadwork data directory.

    Example:
        >>> isinstance(beadwork_data_dir(), Path)
        True
    """
    return Path(user_data_dir(BEADWORK_APP_NAME))


def config_path() -> Path:
    """Return the path to the user config file.

    Example:
        >>> config_path().name == CONFIG_USER_FILENAME
        True
    """
    return beadwork_data_dir() / CONFIG_USER_FILENAME


def default_beads_dir(cwd: Path) -> Path:
    """Return the conventional beads directory under a working directory.

    Example:
        >>> default_beads_dir(Path("/town")).as_posix()
        '/town/.beads'
    """
    return cwd / BEADS_DIRNAME


def formulas_dir(root: Path) -> Path:
    """Return the installed formulas directory under a beads root.

    Example:
        >>> formulas_dir(Path("/town/.beads")).as_posix()
        '/town/.beads/formulas'
    """
    return root / FORMULAS_DIRNAME


def wisp_index_path(beads_dir: Path) -> Path:
    """Return the wisp sidecar index path for a beads directory.

    Example:
        >>> wisp_index_path(Path("/town/.beads")).name
        'issues.jsonl'
    """
    return beads_dir / WISP_INDEX_FILENAME
