"""Launch history and frecency ranking.

Every launch appends a millisecond timestamp to the project's history. The
score sums a weight per launch, heavier for recent launches.
"""

import logging
import time
from pathlib import Path

import orjson

from claude_launchpad.types import ProjectStatistics

logger = logging.getLogger(__name__)

MAX_EVENTS = 100

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS

# Age bands (upper bounds) and their weights; anything older gets OLDER_WEIGHT
BANDS: list[tuple[int, int]] = [
    (HOUR_MS, 100),
    (DAY_MS, 70),
    (7 * DAY_MS, 50),
    (30 * DAY_MS, 30),
]
OLDER_WEIGHT = 10


def _now_ms(now: float | None) -> int:
    return int((time.time() if now is None else now) * 1000)


def calculate_frecency(timestamps: list[int], now_ms: int) -> int:
    """Sum of band weights over all launch timestamps."""
    score = 0
    for ts in timestamps:
        age = now_ms - ts
        for limit, weight in BANDS:
            if age < limit:
                score += weight
                break
        else:
            score += OLDER_WEIGHT
    return score


def sort_by_frecency(stats: list[ProjectStatistics], scores: dict[str, int]) -> list[ProjectStatistics]:
    """Highest score first; ties by most recent activity, inactive projects last."""
    def key(s: ProjectStatistics):
        last = s.last_activity.timestamp() if s.last_activity is not None else None
        return (
            -scores.get(s.project.path, 0),
            last is None,
            -(last or 0.0),
        )
    return sorted(stats, key=key)


class FrecencyStore:
    """Persists launch history as {"launches": {project_path: [ms, ...]}}."""

    def __init__(self, history_file: str | Path):
        self._history_file = Path(history_file)

    def load(self) -> dict[str, list[int]]:
        """Launch history by project path. Missing or corrupt history is empty."""
        try:
            data = orjson.loads(self._history_file.read_bytes())
        except FileNotFoundError:
            return {}
        except (OSError, orjson.JSONDecodeError):
            logger.debug("Unreadable history %s", self._history_file, exc_info=True)
            return {}

        launches = data.get("launches") if isinstance(data, dict) else None
        if not isinstance(launches, dict):
            return {}
        return {
            path: [ts for ts in stamps if isinstance(ts, int) and not isinstance(ts, bool)]
            for path, stamps in launches.items()
            if isinstance(stamps, list)
        }

    def save(self, history: dict[str, list[int]]):
        self._history_file.parent.mkdir(parents=True, exist_ok=True)
        self._history_file.write_bytes(
            orjson.dumps({"launches": history}, option=orjson.OPT_INDENT_2)
        )

    def record_event(self, project_path: str, now: float | None = None):
        """Append a launch for project_path, keeping the newest MAX_EVENTS."""
        history = self.load()
        events = history.setdefault(project_path, [])
        events.append(_now_ms(now))
        history[project_path] = events[-MAX_EVENTS:]
        self.save(history)

    def get_scores(self, now: float | None = None) -> dict[str, int]:
        now_ms = _now_ms(now)
        return {
            path: calculate_frecency(stamps, now_ms)
            for path, stamps in self.load().items()
        }
