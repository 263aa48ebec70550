"""Project discovery orchestrator: scan, decode, aggregate, cache, rank."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import orjson

from claude_launchpad.services.project_scanner import scan_projects
from claude_launchpad.services.stats_cache import StatsCache
from claude_launchpad.services.telemetry import NullTelemetry, Telemetry
from claude_launchpad.services.usage_parser import get_last_session_preview, parse_project
from claude_launchpad.types import Project, ProjectStatistics, SessionPreview

logger = logging.getLogger(__name__)

MAX_WORKERS = 8


@dataclass
class DiscoveryResult:
    stats: list[ProjectStatistics]
    from_cache: bool


class ProjectNotFoundError(LookupError):
    """No project name matches the query."""

    def __init__(self, query: str):
        super().__init__(f'No project found matching "{query}"')
        self.query = query


class ProjectDiscovery:
    """Composes scanning, parsing and the stats cache for the CLI."""

    def __init__(
        self,
        projects_root: str | Path,
        cache: StatsCache | None = None,
        telemetry: Telemetry | None = None,
        max_workers: int = MAX_WORKERS,
    ):
        self._projects_root = Path(projects_root)
        self._cache = cache
        self._telemetry = telemetry if telemetry is not None else NullTelemetry()
        self._max_workers = max_workers

    @property
    def projects_root(self) -> Path:
        return self._projects_root

    def scan(self) -> list[Project]:
        return scan_projects(self._projects_root)

    def get_stats(self, use_cache: bool = True) -> DiscoveryResult:
        """Statistics for every decodable project, from cache when valid.

        A fresh aggregation always rewrites the cache, even when reading it
        was bypassed.
        """
        if use_cache and self._cache is not None:
            cached = self._cache.load()
            if cached is not None:
                self._telemetry.track("scan", project_count=len(cached), from_cache=True)
                return DiscoveryResult(stats=cached, from_cache=True)

        stats = self.parse_all(self.scan())
        if self._cache is not None:
            try:
                self._cache.store(stats)
            except (OSError, orjson.JSONEncodeError):
                logger.debug("Cannot write stats cache", exc_info=True)
        self._telemetry.track("scan", project_count=len(stats), from_cache=False)
        return DiscoveryResult(stats=stats, from_cache=False)

    def parse_all(self, projects: list[Project]) -> list[ProjectStatistics]:
        """Parse projects concurrently; results keep the order of `projects`."""
        if not projects:
            return []
        workers = min(self._max_workers, len(projects))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda p: parse_project(p, self._projects_root), projects))

    def load_previews(self, stats: list[ProjectStatistics]) -> dict[str, SessionPreview | None]:
        """Last-session preview per project path, read concurrently."""
        if not stats:
            return {}
        workers = min(self._max_workers, len(stats))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            previews = pool.map(
                lambda s: get_last_session_preview(s.project, self._projects_root), stats
            )
            return {s.project.path: preview for s, preview in zip(stats, previews)}


def find_project(stats: list[ProjectStatistics], query: str) -> ProjectStatistics | None:
    """Case-insensitive exact name match first, then the first substring match."""
    q = query.lower()
    for s in stats:
        if s.project.name.lower() == q:
            return s
    for s in stats:
        if q in s.project.name.lower():
            return s
    return None


def require_project(stats: list[ProjectStatistics], query: str) -> ProjectStatistics:
    match = find_project(stats, query)
    if match is None:
        raise ProjectNotFoundError(query)
    return match


def filter_archived(stats: list[ProjectStatistics], archived: list[str]) -> list[ProjectStatistics]:
    if not archived:
        return stats
    hidden = set(archived)
    return [s for s in stats if s.project.path not in hidden]
