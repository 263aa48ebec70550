"""Well-known locations: the projects scan root and the launchpad state dir."""

import os
from pathlib import Path

PROJECTS_DIR_ENV = "CCLP_PROJECTS_DIR"
HOME_ENV = "CCLP_HOME"


def get_projects_dir() -> Path:
    """Claude Code's projects directory, one encoded subdirectory per project."""
    override = os.environ.get(PROJECTS_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".claude" / "projects"


def get_state_dir() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cclp"


def get_cache_file() -> Path:
    return get_state_dir() / "cache.json"


def get_history_file() -> Path:
    return get_state_dir() / "history.json"


def get_config_file() -> Path:
    return get_state_dir() / "config.json"


def get_summaries_dir() -> Path:
    return get_state_dir() / "summaries"


def expand_home(path: str) -> str:
    return os.path.expanduser(path)
