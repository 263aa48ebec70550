"""Shared test helpers."""

import json
from pathlib import Path


def make_record(
    msg_type: str = "assistant",
    timestamp: str | None = "2026-02-13T10:00:00.000Z",
    usage: dict | None = None,
    content=None,
    model: str | None = None,
    **extra,
) -> str:
    """A raw JSONL record line."""
    record = {"type": msg_type}
    if timestamp is not None:
        record["timestamp"] = timestamp
    message = {}
    if usage is not None:
        message["usage"] = usage
    if content is not None:
        message["content"] = content
        message["role"] = "user" if msg_type == "user" else "assistant"
    if model is not None:
        message["model"] = model
    if message:
        record["message"] = message
    record.update(extra)
    return json.dumps(record)


def write_session(path: Path, lines: list[str]):
    """Write JSONL lines to a file."""
    path.write_text("\n".join(lines) + "\n")
