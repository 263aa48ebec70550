"""Streaming JSONL reader for Claude Code session files."""

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import orjson

logger = logging.getLogger(__name__)

SESSION_SUFFIX = ".jsonl"

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024

# Max length of an extracted user prompt
MAX_PROMPT_LENGTH = 200

# Fractional seconds of an ISO timestamp, any number of digits
_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def stream_records(file_path: str | Path) -> Iterator[dict]:
    """Stream-parse a JSONL session file, yielding each JSON object record.

    Malformed lines, non-object lines and oversized lines are skipped.
    Raises OSError if the file cannot be opened; callers decide how to degrade.
    """
    path = Path(file_path)
    line_num = 0
    with open(path, "rb") as f:
        for line in f:
            line_num += 1
            line = line.strip()
            if not line:
                continue

            if len(line) > MAX_LINE_SIZE:
                logger.warning(
                    "Line %d in %s exceeds %dMB, skipping",
                    line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
                )
                continue

            try:
                raw = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                logger.debug("Malformed JSON at line %d in %s: %s", line_num, path.name, e)
                continue

            if isinstance(raw, dict):
                yield raw


def list_session_files(project_dir: str | Path, newest_first: bool = False) -> list[Path]:
    """List the *.jsonl record files directly inside a project directory.

    Sorted by name, or by modification time descending with newest_first.
    Raises OSError if the directory cannot be listed.
    """
    directory = Path(project_dir)
    files = [
        entry for entry in directory.iterdir()
        if entry.name.endswith(SESSION_SUFFIX) and entry.is_file()
    ]
    if not newest_first:
        return sorted(files)

    return sorted(files, key=lambda p: (safe_mtime(p), p.name), reverse=True)


def parse_timestamp(ts_value) -> datetime | None:
    """Parse a record timestamp into an aware UTC datetime.

    Accepts ISO 8601 strings ("2026-02-13T12:00:00.000Z") and epoch numbers
    in seconds or milliseconds. Returns None for anything unparseable.
    """
    if isinstance(ts_value, bool):
        return None
    if isinstance(ts_value, (int, float)):
        try:
            seconds = ts_value / 1000 if ts_value > 1e12 else ts_value
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    if isinstance(ts_value, str) and ts_value:
        try:
            parsed = datetime.fromisoformat(_normalize_iso(ts_value))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    return None


def _normalize_iso(value: str) -> str:
    """Pad or trim the fraction to microseconds and spell out a Z offset."""
    value = _FRACTION.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '00000')[:6]}", value, count=1)
    return value.replace("Z", "+00:00")


def record_usage(raw: dict) -> dict | None:
    """The nested message.usage object of a record, if present."""
    message = raw.get("message")
    if not isinstance(message, dict):
        return None
    usage = message.get("usage")
    return usage if isinstance(usage, dict) else None


def record_model(raw: dict) -> str:
    message = raw.get("message")
    if not isinstance(message, dict):
        return ""
    model = message.get("model")
    return model if isinstance(model, str) else ""


def extract_user_text(raw: dict, max_length: int = MAX_PROMPT_LENGTH) -> str:
    """Text of a user-authored record, or "" for any other record.

    String content is used as is; for block content the first non-empty
    text block wins. Meta records (tool results injected as user turns) are
    not user-authored.
    """
    if raw.get("type") != "user" or raw.get("isMeta", False):
        return ""

    message = raw.get("message")
    if not isinstance(message, dict):
        return ""

    content = message.get("content", "")
    if isinstance(content, str):
        return content.strip()[:max_length]
    if isinstance(content, list):
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text":
                text = block.get("text", "")
                if isinstance(text, str) and text.strip():
                    return text.strip()[:max_length]
    return ""


def extract_first_user_message(file_path: str | Path, max_lines: int = 100) -> str:
    """Extract the first real user message text from a session file.

    Reads at most max_lines records to find it.
    """
    try:
        for count, raw in enumerate(stream_records(file_path), start=1):
            if count > max_lines:
                break
            text = extract_user_text(raw)
            if text:
                return text
    except OSError:
        logger.debug("Cannot read session file %s", file_path, exc_info=True)
    return ""


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def safe_mtime(path: str | Path) -> float:
    try:
        return os.path.getmtime(path)
    except OSError:
        return 0.0
