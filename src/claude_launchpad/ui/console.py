"""Rich terminal rendering for listings, usage and cost reports."""

from datetime import datetime, timedelta, timezone

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from claude_launchpad.services.frecency import sort_by_frecency
from claude_launchpad.services.project_info import top_tools
from claude_launchpad.types import DailyUsage, ProjectInfo, ProjectStatistics, TokenUsage
from claude_launchpad.utils.date_grouping import (
    ActivityLevel,
    format_relative_date,
    get_activity_level,
    week_start,
)
from claude_launchpad.utils.pricing import DEFAULT_MODEL, calculate_cost, format_cost, format_tokens

ACTIVITY_STYLES = {
    ActivityLevel.HOT: "red",
    ActivityLevel.WARM: "yellow",
    ActivityLevel.COLD: "blue",
    ActivityLevel.FROZEN: "dim",
}

BAR_WIDTH = 20


def activity_indicator(level: ActivityLevel) -> Text:
    symbol = "○" if level is ActivityLevel.FROZEN else "●"
    return Text(symbol, style=ACTIVITY_STYLES[level])


def sort_by_last_activity(stats: list[ProjectStatistics]) -> list[ProjectStatistics]:
    """Most recent activity first, never-active projects last."""
    return sorted(
        stats,
        key=lambda s: (s.last_activity is None,
                       -(s.last_activity.timestamp() if s.last_activity else 0.0)),
    )


def show_cached_indicator(console: Console, from_cache: bool):
    if from_cache:
        console.print("(cached)", style="dim")


def show_table(console: Console, stats: list[ProjectStatistics], model: str = DEFAULT_MODEL):
    if not stats:
        console.print("No projects found", style="yellow")
        return

    table = Table(box=box.SIMPLE_HEAD, show_edge=False)
    table.add_column("")
    table.add_column("PROJECT", style="bold")
    table.add_column("SESSIONS", justify="right")
    table.add_column("LAST")
    table.add_column("TOKENS", justify="right")
    table.add_column("COST", justify="right", style="green")

    for s in sort_by_last_activity(stats):
        table.add_row(
            activity_indicator(get_activity_level(s.last_activity)),
            Text(s.project.name),
            str(s.sessions),
            format_relative_date(s.last_activity),
            format_tokens(s.usage.io_total),
            format_cost(calculate_cost(s.usage, model)),
        )
    console.print(table)


def show_recent(
    console: Console,
    stats: list[ProjectStatistics],
    scores: dict[str, int],
    limit: int = 5,
    model: str = DEFAULT_MODEL,
):
    if not stats:
        console.print("No projects found", style="yellow")
        return

    console.print("Recent projects:", style="bold")
    console.print()
    for i, s in enumerate(sort_by_frecency(stats, scores)[:limit], start=1):
        line = Text("  ")
        line.append(f"{i}. ", style="dim")
        line.append_text(activity_indicator(get_activity_level(s.last_activity)))
        line.append(f" {s.project.name:<24} ")
        line.append(f"{format_relative_date(s.last_activity):>10} ", style="dim")
        line.append(format_cost(calculate_cost(s.usage, model)), style="green")
        console.print(line)
    console.print()
    console.print("Run: cclp open <name>", style="dim")


def show_stats(console: Console, stats: list[ProjectStatistics], days: int = 0, model: str = DEFAULT_MODEL):
    totals = TokenUsage()
    sessions = 0
    for s in stats:
        totals.add(s.usage)
        sessions += s.sessions

    title = f"Claude Code Usage (last {days}d)" if days else "Claude Code Usage"
    console.print(title, style="bold")
    console.rule(style="dim")
    console.print(f"Projects:       {len(stats)}")
    console.print(f"Sessions:       {sessions}")
    console.print(f"Input tokens:   {format_tokens(totals.input_tokens)}")
    console.print(f"Output tokens:  {format_tokens(totals.output_tokens)}")
    console.print(f"Cache writes:   {format_tokens(totals.cache_creation_input_tokens)}")
    console.print(f"Cache reads:    {format_tokens(totals.cache_read_input_tokens)}")
    console.rule(style="dim")
    console.print(f"Estimated cost: {format_cost(calculate_cost(totals, model))}", style="green")


def filter_daily(daily: DailyUsage, days: int, now: datetime | None = None) -> DailyUsage:
    """Keep day keys no older than `days` days before today (UTC)."""
    today = (now or datetime.now(timezone.utc)).date()
    cutoff = (today - timedelta(days=days)).isoformat()
    return {day: usage for day, usage in daily.items() if day >= cutoff}


def group_weekly(daily: DailyUsage) -> DailyUsage:
    """Merge daily usage into weeks keyed by their Monday."""
    weekly: DailyUsage = {}
    for day, usage in daily.items():
        weekly.setdefault(week_start(day), TokenUsage()).add(usage)
    return weekly


def _show_cost_table(console: Console, title: str, label: str, periods: DailyUsage, model: str):
    if not periods:
        console.print("No cost data found", style="yellow")
        return

    rows = sorted(periods.items(), reverse=True)
    costs = {key: calculate_cost(usage, model) for key, usage in rows}
    max_cost = max(costs.values())

    table = Table(title=title, title_justify="left", box=box.SIMPLE_HEAD, show_edge=False)
    table.add_column(label)
    table.add_column("TOKENS", justify="right")
    table.add_column("COST", justify="right")
    table.add_column("BAR", style="green")

    for key, usage in rows:
        cost = costs[key]
        bar_len = round(cost / max_cost * BAR_WIDTH) if max_cost > 0 else 0
        table.add_row(key, format_tokens(usage.io_total), format_cost(cost), "█" * bar_len)
    console.print(table)
    console.print(f"Total: {format_cost(sum(costs.values()))}", style="green")


def show_daily_cost(
    console: Console,
    daily: DailyUsage,
    days: int = 0,
    model: str = DEFAULT_MODEL,
    now: datetime | None = None,
):
    periods = filter_daily(daily, days, now) if days else daily
    title = f"Daily cost breakdown (last {days}d)" if days else "Daily cost breakdown"
    _show_cost_table(console, title, "DATE", periods, model)


def show_weekly_cost(console: Console, daily: DailyUsage, model: str = DEFAULT_MODEL):
    _show_cost_table(console, "Weekly cost breakdown", "WEEK OF", group_weekly(daily), model)


def _format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "never"
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def _section(console: Console, title: str):
    console.print(f"  {title}", style="bold")
    console.print("  " + "-" * 40, style="dim")


def show_project_info(console: Console, info: ProjectInfo, summary: str = "", model: str = DEFAULT_MODEL):
    stats = info.stats
    console.print()
    console.print(Text(f"  {stats.project.name}", style="bold cyan"))
    console.print(Text(f"  {stats.project.path}", style="dim"))
    console.print()

    if summary:
        _section(console, "Summary")
        for line in summary.splitlines():
            console.print(Text(f"  {line}"))
        console.print()

    _section(console, "Stats")
    console.print(f"  Sessions:     {stats.sessions}")
    console.print(f"  First:        {_format_timestamp(stats.first_activity)}")
    console.print(f"  Last:         {_format_timestamp(stats.last_activity)}")
    console.print(f"  Tokens:       {format_tokens(stats.usage.io_total)}")
    console.print(Text("  Cost:         ").append(format_cost(calculate_cost(stats.usage, model)), style="green"))
    console.print()

    if info.recent_prompts:
        _section(console, "Recent prompts")
        for prompt in info.recent_prompts[:5]:
            flat = prompt.replace("\n", " ")
            suffix = "..." if len(flat) > 60 else ""
            console.print(Text("  • ", style="dim").append(flat[:60] + suffix, style="default"))
        console.print()

    if info.files_modified:
        _section(console, "Files modified")
        for file_path in info.files_modified[:8]:
            short = "/".join(file_path.split("/")[-2:])
            console.print(Text("  • ", style="dim").append(short, style="default"))
        if len(info.files_modified) > 8:
            console.print(f"  ... and {len(info.files_modified) - 8} more", style="dim")
        console.print()

    tools = top_tools(info)
    if tools:
        _section(console, "Top tools")
        for name, count in tools:
            console.print(Text(f"  {name:<20} ").append(f"{count}x", style="dim"))
        console.print()
