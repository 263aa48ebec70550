"""Discover encoded project directories under the projects root."""

import logging
from pathlib import Path
from typing import Callable

from claude_launchpad.services.jsonl_parser import is_hidden
from claude_launchpad.types import Project
from claude_launchpad.utils.path_codec import decode_path, extract_project_name

logger = logging.getLogger(__name__)

Decoder = Callable[[str], str | None]


def get_project_dir(project: Project, projects_root: str | Path) -> Path:
    """Storage directory holding a project's session files."""
    return Path(projects_root) / project.encoded_path


def scan_projects(projects_root: str | Path, decoder: Decoder = decode_path) -> list[Project]:
    """Decode every project directory under the projects root.

    Hidden entries and plain files are skipped. Directories whose original
    path cannot be found on disk are dropped. A missing or unreadable root
    yields an empty list.
    """
    root = Path(projects_root)
    try:
        entries = sorted(root.iterdir())
    except OSError:
        logger.warning("Projects root is not readable: %s", root)
        return []

    projects = []
    for entry in entries:
        if is_hidden(entry.name):
            continue
        try:
            if not entry.is_dir():
                continue
        except OSError:
            continue

        decoded = decoder(entry.name)
        if decoded is None:
            logger.debug("No existing path matches %s, skipping", entry.name)
            continue

        projects.append(Project(
            name=extract_project_name(decoded),
            path=decoded,
            encoded_path=entry.name,
        ))
    return projects
