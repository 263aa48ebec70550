"""Export project statistics as JSON or CSV."""

import csv
import io

import orjson

from claude_launchpad.types import ProjectStatistics
from claude_launchpad.utils.pricing import DEFAULT_MODEL, calculate_cost

EXPORT_FIELDS = [
    "name",
    "path",
    "sessions",
    "firstActivity",
    "lastActivity",
    "inputTokens",
    "outputTokens",
    "cacheCreationTokens",
    "cacheReadTokens",
    "totalTokens",
    "estimatedCost",
]


def to_export_row(stats: ProjectStatistics, model: str = DEFAULT_MODEL) -> dict:
    usage = stats.usage
    return {
        "name": stats.project.name,
        "path": stats.project.path,
        "sessions": stats.sessions,
        "firstActivity": stats.first_activity.isoformat() if stats.first_activity else None,
        "lastActivity": stats.last_activity.isoformat() if stats.last_activity else None,
        "inputTokens": usage.input_tokens,
        "outputTokens": usage.output_tokens,
        "cacheCreationTokens": usage.cache_creation_input_tokens,
        "cacheReadTokens": usage.cache_read_input_tokens,
        "totalTokens": usage.io_total,
        "estimatedCost": calculate_cost(usage, model),
    }


def export_json(stats: list[ProjectStatistics], model: str = DEFAULT_MODEL) -> str:
    rows = [to_export_row(s, model) for s in stats]
    return orjson.dumps(rows, option=orjson.OPT_INDENT_2).decode()


def export_csv(stats: list[ProjectStatistics], model: str = DEFAULT_MODEL) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_FIELDS, lineterminator="\n")
    writer.writeheader()
    for s in stats:
        row = to_export_row(s, model)
        writer.writerow({k: "" if v is None else v for k, v in row.items()})
    return buffer.getvalue().rstrip("\n")


EXPORTERS = {
    "json": export_json,
    "csv": export_csv,
}
