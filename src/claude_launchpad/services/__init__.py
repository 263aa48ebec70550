"""Services for Claude Launchpad."""

from claude_launchpad.services.config_manager import ConfigManager
from claude_launchpad.services.discovery import (
    DiscoveryResult,
    ProjectDiscovery,
    ProjectNotFoundError,
    filter_archived,
    find_project,
    require_project,
)
from claude_launchpad.services.frecency import FrecencyStore, calculate_frecency, sort_by_frecency
from claude_launchpad.services.project_scanner import scan_projects
from claude_launchpad.services.stats_cache import StatsCache, is_envelope_valid
from claude_launchpad.services.telemetry import LoggingTelemetry, NullTelemetry
from claude_launchpad.services.usage_parser import parse_project

__all__ = [
    "ConfigManager",
    "DiscoveryResult",
    "ProjectDiscovery",
    "ProjectNotFoundError",
    "filter_archived",
    "find_project",
    "require_project",
    "FrecencyStore",
    "calculate_frecency",
    "sort_by_frecency",
    "scan_projects",
    "StatsCache",
    "is_envelope_valid",
    "LoggingTelemetry",
    "NullTelemetry",
    "parse_project",
]
