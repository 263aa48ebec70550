"""Tests for launch history and frecency ranking."""

from datetime import datetime, timezone

import orjson

from claude_launchpad.services.frecency import (
    DAY_MS,
    HOUR_MS,
    MAX_EVENTS,
    FrecencyStore,
    calculate_frecency,
    sort_by_frecency,
)
from claude_launchpad.types import Project, ProjectStatistics

NOW_MS = 1_771_000_000_000


def _stats(name, last=None):
    return ProjectStatistics(project=Project(name, f"/w/{name}", f"-w-{name}"), last_activity=last)


class TestCalculateFrecency:
    def test_bands(self):
        assert calculate_frecency([NOW_MS - 60_000], NOW_MS) == 100
        assert calculate_frecency([NOW_MS - 2 * HOUR_MS], NOW_MS) == 70
        assert calculate_frecency([NOW_MS - 3 * DAY_MS], NOW_MS) == 50
        assert calculate_frecency([NOW_MS - 10 * DAY_MS], NOW_MS) == 30
        assert calculate_frecency([NOW_MS - 60 * DAY_MS], NOW_MS) == 10

    def test_sums_events(self):
        stamps = [NOW_MS - 60_000, NOW_MS - 2 * HOUR_MS, NOW_MS - 60 * DAY_MS]
        assert calculate_frecency(stamps, NOW_MS) == 180

    def test_no_events(self):
        assert calculate_frecency([], NOW_MS) == 0

    def test_single_recent_beats_single_old(self):
        recent = calculate_frecency([NOW_MS - 30 * 60_000], NOW_MS)
        old = calculate_frecency([NOW_MS - 3 * DAY_MS], NOW_MS)
        assert recent > old


class TestSortByFrecency:
    def test_score_descending(self):
        items = [_stats("a"), _stats("b"), _stats("c")]
        scores = {"/w/a": 10, "/w/b": 100, "/w/c": 50}
        assert [s.project.name for s in sort_by_frecency(items, scores)] == ["b", "c", "a"]

    def test_ties_by_last_activity_then_inactive_last(self):
        older = datetime(2026, 1, 1, tzinfo=timezone.utc)
        newer = datetime(2026, 2, 1, tzinfo=timezone.utc)
        items = [_stats("none"), _stats("old", older), _stats("new", newer)]
        ordered = sort_by_frecency(items, {})
        assert [s.project.name for s in ordered] == ["new", "old", "none"]


class TestFrecencyStore:
    def test_missing_history_is_empty(self, tmp_path):
        store = FrecencyStore(tmp_path / "history.json")
        assert store.load() == {}
        assert store.get_scores() == {}

    def test_record_event(self, tmp_path):
        store = FrecencyStore(tmp_path / "state" / "history.json")
        store.record_event("/w/a", now=NOW_MS / 1000)
        store.record_event("/w/a", now=NOW_MS / 1000)
        assert store.load() == {"/w/a": [NOW_MS, NOW_MS]}
        assert store.get_scores(now=NOW_MS / 1000) == {"/w/a": 200}

    def test_history_file_layout(self, tmp_path):
        path = tmp_path / "history.json"
        FrecencyStore(path).record_event("/w/a", now=NOW_MS / 1000)
        assert orjson.loads(path.read_bytes()) == {"launches": {"/w/a": [NOW_MS]}}

    def test_caps_events(self, tmp_path):
        store = FrecencyStore(tmp_path / "history.json")
        store.save({"/w/a": list(range(MAX_EVENTS))})
        store.record_event("/w/a", now=NOW_MS / 1000)
        events = store.load()["/w/a"]
        assert len(events) == MAX_EVENTS
        assert events[0] == 1
        assert events[-1] == NOW_MS

    def test_corrupt_history_is_empty(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("[[[")
        assert FrecencyStore(path).load() == {}

    def test_unexpected_shape_is_filtered(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_bytes(orjson.dumps({"launches": {"/w/a": [1, "x", True, 2], "/w/b": "nope"}}))
        assert FrecencyStore(path).load() == {"/w/a": [1, 2]}

    def test_recorded_launch_outranks_unlaunched(self, tmp_path):
        store = FrecencyStore(tmp_path / "history.json")
        store.record_event("/w/b", now=NOW_MS / 1000)
        items = [_stats("a", datetime(2026, 2, 1, tzinfo=timezone.utc)), _stats("b")]
        ordered = sort_by_frecency(items, store.get_scores(now=NOW_MS / 1000))
        assert ordered[0].project.name == "b"
