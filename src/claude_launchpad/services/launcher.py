"""Start Claude Code in a project and create new project directories."""

import logging
import os
import subprocess
from pathlib import Path

from claude_launchpad.utils.paths import expand_home

logger = logging.getLogger(__name__)

CLAUDE_COMMAND = "claude"


class LaunchError(Exception):
    """Claude Code could not be started."""


class ProjectCreationError(Exception):
    """A new project directory could not be created."""


def launch_claude(project_path: str) -> int:
    """Run Claude Code interactively with project_path as its working directory.

    The terminal is inherited. Returns the child's exit code.
    """
    logger.debug("Launching %s in %s", CLAUDE_COMMAND, project_path)
    try:
        completed = subprocess.run([CLAUDE_COMMAND], cwd=project_path)
    except OSError as e:
        raise LaunchError(f"Failed to launch {CLAUDE_COMMAND}: {e}") from e
    return completed.returncode


def create_project(name: str, base_dir: str) -> str:
    """Create <base_dir>/<name> and return its absolute path.

    base_dir may start with ~. The base directory must already exist; the
    project directory may.
    """
    if not base_dir:
        raise ProjectCreationError("No base directory set. Run: cclp set-base <path>")
    if not name or "/" in name or name in (".", ".."):
        raise ProjectCreationError(f"Invalid project name: {name!r}")

    base = Path(os.path.abspath(expand_home(base_dir)))
    if not base.is_dir():
        raise ProjectCreationError(f"Base directory does not exist: {base}")

    project_path = base / name
    try:
        project_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProjectCreationError(f"Cannot create {project_path}: {e}") from e
    return str(project_path)
