"""Aggregate token usage and activity from a project's session files."""

import logging
from pathlib import Path

from claude_launchpad.services.jsonl_parser import (
    extract_user_text,
    list_session_files,
    parse_timestamp,
    record_model,
    record_usage,
    stream_records,
)
from claude_launchpad.services.project_scanner import get_project_dir
from claude_launchpad.types import DailyUsage, Project, ProjectStatistics, SessionPreview, TokenUsage

logger = logging.getLogger(__name__)

# Max length of the first-message snippet kept in a preview
PREVIEW_MESSAGE_LENGTH = 80


def parse_project(project: Project, projects_root: str | Path) -> ProjectStatistics:
    """Aggregate statistics for one project from all of its session files."""
    return parse_project_dir(project, get_project_dir(project, projects_root))


def parse_project_dir(project: Project, project_dir: str | Path) -> ProjectStatistics:
    """Aggregate statistics from the session files in project_dir.

    The session count is the number of record files. An unlistable directory
    yields empty statistics; an unreadable file contributes nothing beyond
    what was read before the failure.
    """
    stats = ProjectStatistics(project=project)
    try:
        session_files = list_session_files(project_dir)
    except OSError:
        logger.debug("Cannot list project dir %s", project_dir, exc_info=True)
        return stats

    stats.sessions = len(session_files)
    for session_file in session_files:
        try:
            for raw in stream_records(session_file):
                _accumulate(stats, raw)
        except OSError:
            logger.debug("Cannot read session file %s", session_file, exc_info=True)
    return stats


def _accumulate(stats: ProjectStatistics, raw: dict) -> None:
    timestamp = parse_timestamp(raw.get("timestamp"))
    if timestamp is not None:
        stats.observe(timestamp)

    usage = record_usage(raw)
    if usage is not None:
        stats.usage.add(TokenUsage.from_raw(usage))


def get_cost_by_day(projects: list[Project], projects_root: str | Path) -> DailyUsage:
    """Usage per UTC calendar day, merged across all projects.

    Only records carrying both a timestamp and a usage object count.
    """
    daily: DailyUsage = {}
    for project in projects:
        project_dir = get_project_dir(project, projects_root)
        try:
            session_files = list_session_files(project_dir)
        except OSError:
            logger.debug("Cannot list project dir %s", project_dir, exc_info=True)
            continue

        for session_file in session_files:
            try:
                for raw in stream_records(session_file):
                    usage = record_usage(raw)
                    if usage is None:
                        continue
                    timestamp = parse_timestamp(raw.get("timestamp"))
                    if timestamp is None:
                        continue
                    day = timestamp.date().isoformat()
                    daily.setdefault(day, TokenUsage()).add(TokenUsage.from_raw(usage))
            except OSError:
                logger.debug("Cannot read session file %s", session_file, exc_info=True)
    return daily


def get_last_session_preview(project: Project, projects_root: str | Path) -> SessionPreview | None:
    """Preview of the most recently modified session file, or None if there is none."""
    project_dir = get_project_dir(project, projects_root)
    try:
        session_files = list_session_files(project_dir, newest_first=True)
    except OSError:
        logger.debug("Cannot list project dir %s", project_dir, exc_info=True)
        return None
    if not session_files:
        return None

    preview = SessionPreview()
    try:
        for raw in stream_records(session_files[0]):
            timestamp = parse_timestamp(raw.get("timestamp"))
            if timestamp is not None and (
                preview.last_timestamp is None or timestamp > preview.last_timestamp
            ):
                preview.last_timestamp = timestamp

            if not preview.model:
                preview.model = record_model(raw)

            usage = record_usage(raw)
            if usage is not None:
                counted = TokenUsage.from_raw(usage)
                preview.input_tokens += counted.input_tokens
                preview.output_tokens += counted.output_tokens

            if not preview.first_user_message:
                preview.first_user_message = extract_user_text(raw, PREVIEW_MESSAGE_LENGTH)
    except OSError:
        logger.debug("Cannot read session file %s", session_files[0], exc_info=True)
        return None
    return preview
