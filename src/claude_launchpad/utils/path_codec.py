"""Encode and decode Claude Code project path ↔ directory name.

The encoding is lossy: path separators and underscores both become hyphens,
so a directory name cannot be inverted without looking at the filesystem.
Decoding is a backtracking search that only accepts candidates existing on
disk.
"""

import os
import re
from typing import Callable

SEPARATOR = "-"
ALTERNATE = "_"

_ENCODED_CHARS = re.compile(r"[/\\_]")


def encode_path(path: str) -> str:
    """Encode a filesystem path to a Claude project directory name.

    /home/wiz/AI/my_app → -home-wiz-AI-my-app
    """
    if not path:
        return ""
    return _ENCODED_CHARS.sub(SEPARATOR, path)


def decode_path(
    encoded: str,
    is_dir: Callable[[str], bool] = os.path.isdir,
) -> str | None:
    """Decode a Claude project directory name to an existing filesystem path.

    -home-wiz-AI-my-app → /home/wiz/AI/my-app (if that directory exists)

    At each step the longest run of remaining parts is tried first, joined
    with hyphens and then with underscores. Returns None when no grouping
    yields a directory that exists all the way down.
    """
    if not encoded or not encoded.startswith(SEPARATOR):
        return None
    parts = encoded[1:].split(SEPARATOR)
    if not parts or parts == [""]:
        return None

    dead_ends: set[tuple[int, str]] = set()

    def find(index: int, current: str) -> str | None:
        if index >= len(parts):
            return current if is_dir(current) else None
        if (index, current) in dead_ends:
            return None

        for end in range(len(parts), index, -1):
            for candidate in _candidate_segments(parts[index:end]):
                path = current + "/" + candidate
                if not is_dir(path):
                    continue
                found = find(end, path)
                if found is not None:
                    return found

        dead_ends.add((index, current))
        return None

    return find(0, "")


def _candidate_segments(group: list[str]) -> list[str]:
    """Joined forms of a group of parts, hyphen first."""
    hyphenated = SEPARATOR.join(group)
    if not hyphenated.strip(SEPARATOR):
        return []
    if len(group) == 1:
        return [hyphenated]
    return [hyphenated, ALTERNATE.join(group)]


def extract_project_name(path: str) -> str:
    """Get the last path segment as the project display name.

    /home/wiz/AI/LLM → LLM
    """
    if not path:
        return ""
    stripped = path.rstrip("/")
    return stripped.rsplit("/", 1)[-1] or path
