"""Usage event collaborators handed to the discovery service and the CLI."""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Telemetry(Protocol):
    def track(self, event: str, **properties) -> None: ...


class NullTelemetry:
    """Discards every event."""

    def track(self, event: str, **properties) -> None:
        pass


class LoggingTelemetry:
    """Records events through the `claude_launchpad.telemetry` logger.

    Events are never allowed to fail a command; properties with a None value
    are dropped.
    """

    def __init__(self, prefix: str = "cclp_"):
        self._prefix = prefix
        self._logger = logging.getLogger("claude_launchpad.telemetry")

    def track(self, event: str, **properties) -> None:
        name = self._prefix + event
        props = {k: v for k, v in properties.items() if v is not None}
        self._logger.info("%s %s", name, props)
