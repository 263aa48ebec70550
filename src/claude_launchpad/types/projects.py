"""Project identity and derived statistics types."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from claude_launchpad.types.usage import TokenUsage


@dataclass(frozen=True)
class Project:
    name: str           # Last path segment
    path: str           # Decoded filesystem path, validated on disk
    encoded_path: str   # Directory name under the projects root


@dataclass
class ProjectStatistics:
    project: Project
    sessions: int = 0
    first_activity: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    usage: TokenUsage = field(default_factory=TokenUsage)

    def observe(self, timestamp: datetime) -> None:
        """Widen the first/last activity bounds to include timestamp."""
        if self.first_activity is None or timestamp < self.first_activity:
            self.first_activity = timestamp
        if self.last_activity is None or timestamp > self.last_activity:
            self.last_activity = timestamp


@dataclass
class SessionPreview:
    """Summary of the most recently modified session file of a project."""
    last_timestamp: Optional[datetime] = None
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    first_user_message: str = ""


@dataclass
class ProjectInfo:
    stats: ProjectStatistics
    recent_prompts: list[str] = field(default_factory=list)
    files_modified: list[str] = field(default_factory=list)
    tools_used: dict[str, int] = field(default_factory=dict)
    summary: str = ""
