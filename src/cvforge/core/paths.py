"""Where cvforge keeps its ``.env`` file and server logs."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

_PACKAGE_DIR = Path(__file__).resolve().parents[1]


def _is_checkout_root(candidate: Path) -> bool:
    return (candidate / "pyproject.toml").is_file() and (candidate / "src" / "cvforge").is_dir()


@lru_cache(maxsize=1)
def find_project_root() -> Path:
    """Return the cvforge checkout that holds this package.

    An unrelated ``pyproject.toml`` higher up (cvforge installed inside some
    other project) is skipped. Without a checkout, the current working
    directory is used.
    """
    for parent in _PACKAGE_DIR.parents:
        if _is_checkout_root(parent):
            return parent
    return Path.cwd()


def get_env_file() -> Path:
    return find_project_root() / ".env"


def get_log_dir() -> Path:
    """Return ``<project_root>/data/logs``, creating it if needed."""
    log_dir = find_project_root() / "data" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
