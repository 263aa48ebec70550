"""Tests for claude_launchpad.services.usage_parser."""

import os
import random
from datetime import datetime, timezone

from claude_launchpad.services.usage_parser import (
    get_cost_by_day,
    get_last_session_preview,
    parse_project,
    parse_project_dir,
)
from claude_launchpad.types import Project, TokenUsage
from helpers import make_record, write_session


def _project(encoded: str = "-tmp-proj") -> Project:
    return Project(name="proj", path="/tmp/proj", encoded_path=encoded)


USAGE_LINES = [
    make_record(timestamp="2026-02-10T09:00:00Z",
                usage={"input_tokens": 10, "output_tokens": 5,
                       "cache_creation_input_tokens": 100, "cache_read_input_tokens": 1000}),
    make_record(timestamp="2026-02-12T18:30:00Z", usage={"input_tokens": 20}),
    make_record(timestamp="2026-02-11T00:00:00Z", usage={"output_tokens": 7}),
    make_record(msg_type="user", timestamp="2026-02-09T08:00:00Z", content="start"),
    make_record(timestamp=None, usage={"input_tokens": 3, "cache_read_input_tokens": 2}),
]


class TestParseProjectDir:
    def test_aggregates_usage_and_bounds(self, tmp_path):
        write_session(tmp_path / "a.jsonl", USAGE_LINES)
        stats = parse_project_dir(_project(), tmp_path)

        assert stats.sessions == 1
        assert stats.usage == TokenUsage(33, 12, 100, 1002)
        assert stats.first_activity == datetime(2026, 2, 9, 8, tzinfo=timezone.utc)
        assert stats.last_activity == datetime(2026, 2, 12, 18, 30, tzinfo=timezone.utc)

    def test_session_count_is_file_count(self, tmp_path):
        write_session(tmp_path / "a.jsonl", USAGE_LINES[:1])
        write_session(tmp_path / "b.jsonl", USAGE_LINES[1:])
        (tmp_path / "c.jsonl").write_text("")
        (tmp_path / "sessions-index.json").write_text('{"sessions": 99}')
        assert parse_project_dir(_project(), tmp_path).sessions == 3

    def test_order_does_not_matter(self, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()

        write_session(first / "one.jsonl", USAGE_LINES)
        shuffled = list(USAGE_LINES)
        random.Random(7).shuffle(shuffled)
        write_session(second / "z.jsonl", shuffled[:2])
        write_session(second / "a.jsonl", shuffled[2:])

        one = parse_project_dir(_project(), first)
        two = parse_project_dir(_project(), second)
        assert one.usage == two.usage
        assert one.first_activity == two.first_activity
        assert one.last_activity == two.last_activity

    def test_missing_fields_are_zero(self, tmp_path):
        write_session(tmp_path / "a.jsonl", [
            make_record(usage={}),
            make_record(usage={"input_tokens": "many", "output_tokens": -4, "cache_read_input_tokens": None}),
        ])
        stats = parse_project_dir(_project(), tmp_path)
        assert stats.usage == TokenUsage()
        assert stats.sessions == 1

    def test_unlistable_dir_gives_empty_stats(self, tmp_path):
        stats = parse_project_dir(_project(), tmp_path / "missing")
        assert stats.sessions == 0
        assert stats.usage == TokenUsage()
        assert stats.first_activity is None
        assert stats.last_activity is None

    def test_parse_project_uses_storage_dir(self, tmp_path):
        storage = tmp_path / "-tmp-proj"
        storage.mkdir()
        write_session(storage / "s.jsonl", USAGE_LINES[:2])
        stats = parse_project(_project(), tmp_path)
        assert stats.usage.input_tokens == 30


class TestCostByDay:
    def test_merges_days_across_projects(self, tmp_path):
        for encoded in ("-a", "-b"):
            (tmp_path / encoded).mkdir()
        write_session(tmp_path / "-a" / "s.jsonl", [
            make_record(timestamp="2026-02-10T09:00:00Z", usage={"input_tokens": 10}),
            make_record(timestamp="2026-02-10T23:30:00-02:00", usage={"input_tokens": 1}),
        ])
        write_session(tmp_path / "-b" / "s.jsonl", [
            make_record(timestamp="2026-02-10T12:00:00Z", usage={"output_tokens": 4}),
            make_record(timestamp=None, usage={"input_tokens": 500}),
            "garbage",
        ])
        daily = get_cost_by_day([_project("-a"), _project("-b"), _project("-missing")], tmp_path)

        assert set(daily) == {"2026-02-10", "2026-02-11"}
        assert daily["2026-02-10"] == TokenUsage(input_tokens=10, output_tokens=4)
        assert daily["2026-02-11"] == TokenUsage(input_tokens=1)


class TestLastSessionPreview:
    def test_uses_newest_file(self, tmp_path):
        storage = tmp_path / "-tmp-proj"
        storage.mkdir()
        old = storage / "old.jsonl"
        new = storage / "new.jsonl"
        write_session(old, [make_record(msg_type="user", content="old prompt")])
        write_session(new, [
            make_record(msg_type="user", content="new prompt", timestamp="2026-02-10T09:00:00Z"),
            make_record(model="claude-opus-4-6", usage={"input_tokens": 5, "output_tokens": 6},
                        timestamp="2026-02-10T09:05:00Z"),
            make_record(model="claude-haiku-4-5", usage={"input_tokens": 1}),
        ])
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(new, (2_000_000, 2_000_000))

        preview = get_last_session_preview(_project(), tmp_path)
        assert preview.first_user_message == "new prompt"
        assert preview.model == "claude-opus-4-6"
        assert preview.input_tokens == 6
        assert preview.output_tokens == 6
        assert preview.last_timestamp == datetime(2026, 2, 13, 10, 0, tzinfo=timezone.utc)

    def test_no_session_files(self, tmp_path):
        (tmp_path / "-tmp-proj").mkdir()
        assert get_last_session_preview(_project(), tmp_path) is None

    def test_missing_dir(self, tmp_path):
        assert get_last_session_preview(_project(), tmp_path) is None
