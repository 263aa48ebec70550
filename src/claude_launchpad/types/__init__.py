"""Type definitions for Claude Launchpad."""

from claude_launchpad.types.usage import TokenUsage, DailyUsage
from claude_launchpad.types.projects import (
    Project,
    ProjectStatistics,
    SessionPreview,
    ProjectInfo,
)

__all__ = [
    "TokenUsage",
    "DailyUsage",
    "Project",
    "ProjectStatistics",
    "SessionPreview",
    "ProjectInfo",
]
