"""Detailed project view: recent prompts, tool tallies, touched files, AI summary."""

import logging
import subprocess
import time
from datetime import datetime
from pathlib import Path

import orjson

from claude_launchpad.services.jsonl_parser import extract_user_text, list_session_files, stream_records
from claude_launchpad.services.project_scanner import get_project_dir
from claude_launchpad.types import ProjectInfo, ProjectStatistics

logger = logging.getLogger(__name__)

RECENT_SESSION_FILES = 3
MAX_RECENT_PROMPTS = 10
MAX_FILES_MODIFIED = 15
INFO_PROMPT_LENGTH = 100

# Tools whose file_path input counts as a modified file
WRITE_TOOLS = frozenset({"Write", "Edit", "MultiEdit", "NotebookEdit"})

SUMMARY_MAX_AGE_S = 24 * 60 * 60
SUMMARY_TIMEOUT_S = 30


def get_project_info(stats: ProjectStatistics, projects_root: str | Path) -> ProjectInfo:
    """Scan the newest session files of a project for prompts and tool activity."""
    info = ProjectInfo(stats=stats)
    project_dir = get_project_dir(stats.project, projects_root)
    try:
        session_files = list_session_files(project_dir, newest_first=True)
    except OSError:
        logger.debug("Cannot list project dir %s", project_dir, exc_info=True)
        return info

    files_modified: dict[str, None] = {}
    for session_file in session_files[:RECENT_SESSION_FILES]:
        try:
            for raw in stream_records(session_file):
                _collect(info, files_modified, raw)
        except OSError:
            logger.debug("Cannot read session file %s", session_file, exc_info=True)

    info.files_modified = list(files_modified)[:MAX_FILES_MODIFIED]
    return info


def _collect(info: ProjectInfo, files_modified: dict[str, None], raw: dict) -> None:
    if len(info.recent_prompts) < MAX_RECENT_PROMPTS:
        prompt = extract_user_text(raw, INFO_PROMPT_LENGTH)
        if prompt:
            info.recent_prompts.append(prompt)

    # Flat tool records
    if raw.get("type") == "tool_use" or raw.get("tool_name"):
        name = raw.get("tool_name") or "unknown"
        tool_input = raw.get("tool_input")
        _tally_tool(info, files_modified, str(name), tool_input if isinstance(tool_input, dict) else {})

    message = raw.get("message")
    if not isinstance(message, dict):
        return
    content = message.get("content")
    if not isinstance(content, list):
        return
    for block in content:
        if not isinstance(block, dict) or block.get("type") != "tool_use":
            continue
        name = block.get("name")
        if not name:
            continue
        tool_input = block.get("input")
        _tally_tool(info, files_modified, str(name), tool_input if isinstance(tool_input, dict) else {})


def _tally_tool(info: ProjectInfo, files_modified: dict[str, None], name: str, tool_input: dict) -> None:
    info.tools_used[name] = info.tools_used.get(name, 0) + 1
    file_path = tool_input.get("file_path")
    if name in WRITE_TOOLS and isinstance(file_path, str) and file_path:
        files_modified.setdefault(file_path, None)


def top_tools(info: ProjectInfo, limit: int = 5) -> list[tuple[str, int]]:
    """Most used tools, highest count first, ties by name."""
    return sorted(info.tools_used.items(), key=lambda item: (-item[1], item[0]))[:limit]


# ----------------------------------------------------------------------
# AI summary
# ----------------------------------------------------------------------

class SummaryCache:
    """One JSON document per project under the summaries directory.

    A cached summary is served while it is younger than SUMMARY_MAX_AGE_S
    and the project's last activity is unchanged since it was written.
    """

    def __init__(self, summaries_dir: str | Path, max_age_s: float = SUMMARY_MAX_AGE_S):
        self._dir = Path(summaries_dir)
        self._max_age_s = max_age_s

    def path_for(self, project_path: str) -> Path:
        return self._dir / f"{project_path.replace('/', '-').lstrip('-')}.json"

    def get(self, project_path: str, last_activity: datetime | None, now: float | None = None) -> str | None:
        now = time.time() if now is None else now
        try:
            data = orjson.loads(self.path_for(project_path).read_bytes())
        except (OSError, orjson.JSONDecodeError):
            return None
        if not isinstance(data, dict):
            return None

        timestamp = data.get("timestamp")
        summary = data.get("summary")
        if not isinstance(timestamp, (int, float)) or not isinstance(summary, str):
            return None
        age_s = now - timestamp / 1000
        if age_s >= self._max_age_s:
            return None
        if data.get("lastActivity") != _activity_key(last_activity):
            return None
        return summary

    def put(self, project_path: str, last_activity: datetime | None, summary: str, now: float | None = None):
        now = time.time() if now is None else now
        self._dir.mkdir(parents=True, exist_ok=True)
        document = {
            "timestamp": int(now * 1000),
            "lastActivity": _activity_key(last_activity),
            "summary": summary,
        }
        self.path_for(project_path).write_bytes(orjson.dumps(document))


def _activity_key(last_activity: datetime | None) -> str:
    return last_activity.isoformat() if last_activity is not None else ""


class SummaryUnavailable(Exception):
    """The external summarizer could not produce a summary."""


def build_summary_prompt(info: ProjectInfo) -> str:
    stats = info.stats
    prompts = "\n- ".join(info.recent_prompts[:5])
    return (
        "Summarize this Claude Code project in 2-3 sentences. Focus on what was built/done.\n"
        "\n"
        f"Project: {stats.project.name}\n"
        f"Path: {stats.project.path}\n"
        f"Sessions: {stats.sessions}\n"
        "Recent prompts:\n"
        f"- {prompts}\n"
        "\n"
        "Summary:"
    )


def generate_summary(info: ProjectInfo, timeout: float = SUMMARY_TIMEOUT_S) -> str:
    """Run `claude -p` in the project directory and return its output.

    Raises SummaryUnavailable if the CLI is missing, times out, or prints nothing.
    """
    try:
        result = subprocess.run(
            ["claude", "-p", build_summary_prompt(info)],
            cwd=info.stats.project.path,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise SummaryUnavailable("Summary generation timed out") from e
    except OSError as e:
        raise SummaryUnavailable("Claude CLI not available for summary") from e

    output = result.stdout.strip()
    if not output:
        raise SummaryUnavailable("Unable to generate summary")
    return output


def get_or_generate_summary(info: ProjectInfo, cache: SummaryCache, timeout: float = SUMMARY_TIMEOUT_S) -> str:
    """Cached summary if still valid, otherwise a fresh one (cached on success).

    A failed generation returns its reason as the summary text and is not cached.
    """
    stats = info.stats
    cached = cache.get(stats.project.path, stats.last_activity)
    if cached is not None:
        return cached

    try:
        summary = generate_summary(info, timeout=timeout)
    except SummaryUnavailable as e:
        logger.debug("Summary unavailable for %s: %s", stats.project.path, e)
        return str(e)

    try:
        cache.put(stats.project.path, stats.last_activity, summary)
    except OSError:
        logger.debug("Cannot write summary cache for %s", stats.project.path, exc_info=True)
    return summary
