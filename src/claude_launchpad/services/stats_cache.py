"""On-disk cache of aggregated project statistics.

The whole collection is stored as one JSON envelope together with the time
it was captured and the projects root's modification time. It is served only
while both still hold: younger than the TTL and the root unchanged.
"""

import logging
import os
import time
from datetime import datetime
from pathlib import Path

import orjson

from claude_launchpad.types import Project, ProjectStatistics, TokenUsage

logger = logging.getLogger(__name__)

CACHE_TTL_S = 5 * 60


def get_dir_fingerprint(path: str | Path) -> int:
    """Modification time of a directory in nanoseconds, 0 if it cannot be read."""
    try:
        return os.stat(path).st_mtime_ns
    except OSError:
        return 0


def is_envelope_valid(envelope: dict, current_fingerprint: int, now_ms: int, ttl_ms: int) -> bool:
    """Whether a loaded envelope may be served."""
    timestamp = envelope.get("timestamp")
    fingerprint = envelope.get("projects_dir_mtime")
    if not isinstance(timestamp, int) or not isinstance(fingerprint, int):
        return False
    if now_ms - timestamp > ttl_ms:
        return False
    return fingerprint == current_fingerprint


class StatsCache:
    """Caches the statistics of all projects to avoid re-parsing JSONL files."""

    def __init__(self, cache_file: str | Path, projects_root: str | Path, ttl_s: float = CACHE_TTL_S):
        self._cache_file = Path(cache_file)
        self._projects_root = Path(projects_root)
        self._ttl_ms = int(ttl_s * 1000)

    @property
    def cache_file(self) -> Path:
        return self._cache_file

    def load(self, now: float | None = None) -> list[ProjectStatistics] | None:
        """The cached statistics, or None on a miss.

        A missing, unparseable, expired or stale envelope is a miss.
        """
        now = time.time() if now is None else now
        try:
            envelope = orjson.loads(self._cache_file.read_bytes())
        except FileNotFoundError:
            return None
        except (OSError, orjson.JSONDecodeError):
            logger.debug("Unreadable stats cache %s", self._cache_file, exc_info=True)
            return None
        if not isinstance(envelope, dict):
            return None

        fingerprint = get_dir_fingerprint(self._projects_root)
        if not is_envelope_valid(envelope, fingerprint, int(now * 1000), self._ttl_ms):
            return None

        try:
            return [deserialize_stats(item) for item in envelope["stats"]]
        except (KeyError, TypeError, ValueError):
            logger.debug("Malformed stats cache %s", self._cache_file, exc_info=True)
            return None

    def store(self, stats: list[ProjectStatistics], now: float | None = None):
        now = time.time() if now is None else now
        envelope = {
            "timestamp": int(now * 1000),
            "projects_dir_mtime": get_dir_fingerprint(self._projects_root),
            "stats": [serialize_stats(s) for s in stats],
        }
        self._cache_file.parent.mkdir(parents=True, exist_ok=True)
        self._cache_file.write_bytes(orjson.dumps(envelope))

    def invalidate(self) -> bool:
        """Delete the envelope. Returns False if there was nothing to delete."""
        try:
            self._cache_file.unlink()
        except FileNotFoundError:
            return False
        return True


def serialize_stats(stats: ProjectStatistics) -> dict:
    return {
        "project": {
            "name": stats.project.name,
            "path": stats.project.path,
            "encoded_path": stats.project.encoded_path,
        },
        "sessions": stats.sessions,
        "first_activity": _format_datetime(stats.first_activity),
        "last_activity": _format_datetime(stats.last_activity),
        "usage": stats.usage.to_dict(),
    }


def deserialize_stats(data: dict) -> ProjectStatistics:
    project = data["project"]
    usage = data["usage"]
    return ProjectStatistics(
        project=Project(
            name=str(project["name"]),
            path=str(project["path"]),
            encoded_path=str(project["encoded_path"]),
        ),
        sessions=int(data["sessions"]),
        first_activity=_parse_datetime(data.get("first_activity")),
        last_activity=_parse_datetime(data.get("last_activity")),
        usage=TokenUsage(
            input_tokens=int(usage["input_tokens"]),
            output_tokens=int(usage["output_tokens"]),
            cache_creation_input_tokens=int(usage["cache_creation_input_tokens"]),
            cache_read_input_tokens=int(usage["cache_read_input_tokens"]),
        ),
    )


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)
