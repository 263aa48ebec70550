"""Command-line interface: `cclp` and its subcommands."""

import logging
from dataclasses import dataclass
from pathlib import Path

import click
from click.shell_completion import get_completion_class
from rich.console import Console

from claude_launchpad.services.config_manager import ConfigManager
from claude_launchpad.services.discovery import (
    ProjectDiscovery,
    ProjectNotFoundError,
    filter_archived,
    require_project,
)
from claude_launchpad.services.exporter import EXPORTERS
from claude_launchpad.services.frecency import FrecencyStore
from claude_launchpad.services.launcher import LaunchError, ProjectCreationError, create_project, launch_claude
from claude_launchpad.services.project_info import SummaryCache, get_or_generate_summary, get_project_info
from claude_launchpad.services.stats_cache import StatsCache
from claude_launchpad.services.telemetry import LoggingTelemetry, NullTelemetry, Telemetry
from claude_launchpad.services.usage_parser import get_cost_by_day
from claude_launchpad.types import ProjectStatistics
from claude_launchpad.ui import console as views
from claude_launchpad.utils import paths
from claude_launchpad.utils.date_grouping import filter_by_days

logger = logging.getLogger(__name__)

PROG_NAME = "cclp"


@dataclass
class AppContext:
    """Per-invocation collaborators shared by every command."""
    config: ConfigManager
    discovery: ProjectDiscovery
    cache: StatsCache
    frecency: FrecencyStore
    summaries: SummaryCache
    telemetry: Telemetry
    console: Console
    days: int
    use_cache: bool

    @property
    def model(self) -> str:
        return self.config.get_string("defaultModel")

    def get_stats(self, days: int | None = None, include_archived: bool = False) -> tuple[list[ProjectStatistics], bool]:
        """Discovered statistics with archive and day filters applied."""
        result = self.discovery.get_stats(use_cache=self.use_cache)
        stats = result.stats
        if not include_archived:
            stats = filter_archived(stats, self.config.get_archived())
        window = self.days if days is None else days
        if window:
            stats = filter_by_days(stats, window)
        return stats, result.from_cache

    def find(self, name: str) -> ProjectStatistics:
        stats = self.discovery.get_stats(use_cache=self.use_cache).stats
        try:
            return require_project(stats, name)
        except ProjectNotFoundError as e:
            self.telemetry.track("lookup", success=False)
            raise click.ClickException(str(e)) from e


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _launch(app: AppContext, stats: ProjectStatistics) -> int:
    """Record the launch, then hand the terminal to Claude Code."""
    app.frecency.record_event(stats.project.path)
    app.console.print(f"Opening {stats.project.path}...", style="dim")
    try:
        return launch_claude(stats.project.path)
    except LaunchError as e:
        raise click.ClickException(str(e)) from e


days_option = click.option("-d", "--days", type=click.IntRange(min=1), default=None,
                           help="Filter to projects active in the last N days.")


@click.group(invoke_without_command=True)
@click.option("-d", "--days", type=click.IntRange(min=0), default=None,
              help="Filter to projects active in the last N days.")
@click.option("--no-cache", "no_cache", is_flag=True, help="Bypass the cache and re-read session logs.")
@click.option("--projects-dir", type=click.Path(file_okay=False, path_type=Path),
              envvar=paths.PROJECTS_DIR_ENV, default=None,
              help="Claude Code projects directory.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.version_option(package_name="claude-launchpad", prog_name=PROG_NAME)
@click.pass_context
def cli(ctx: click.Context, days, no_cache, projects_dir, verbose):
    """Fast CLI to scan, list, and launch Claude Code projects."""
    config = ConfigManager(paths.get_config_file())
    _configure_logging(verbose or config.get_bool("debugLogging"))

    projects_root = projects_dir or paths.get_projects_dir()
    logger.debug("Projects root: %s", projects_root)
    telemetry: Telemetry = LoggingTelemetry() if config.get_bool("telemetry") else NullTelemetry()
    cache = StatsCache(paths.get_cache_file(), projects_root)
    ctx.obj = AppContext(
        config=config,
        discovery=ProjectDiscovery(projects_root, cache=cache, telemetry=telemetry),
        cache=cache,
        frecency=FrecencyStore(paths.get_history_file()),
        summaries=SummaryCache(paths.get_summaries_dir()),
        telemetry=telemetry,
        console=Console(),
        days=days if days is not None else config.get_int("defaultDays"),
        use_cache=not no_cache,
    )

    if ctx.invoked_subcommand is None:
        ctx.exit(_run_picker(ctx.obj))


def _run_picker(app: AppContext) -> int:
    from claude_launchpad.ui.picker import pick_project

    stats, from_cache = app.get_stats()
    if not stats:
        app.console.print("No projects found", style="yellow")
        return 0

    scores = app.frecency.get_scores()
    previews = app.discovery.load_previews(stats)
    views.show_cached_indicator(app.console, from_cache)

    selected = pick_project(stats, scores, previews, app.model)
    app.telemetry.track("picker", project_count=len(stats), days_filter=app.days or None,
                        success=selected is not None)
    if selected is None:
        return 0
    return _launch(app, selected)


@cli.command("list")
@days_option
@click.option("-a", "--all", "show_all", is_flag=True, help="Include archived projects.")
@click.pass_obj
def list_projects(app: AppContext, days, show_all):
    """Show all projects in table format."""
    stats, from_cache = app.get_stats(days=days, include_archived=show_all)
    app.telemetry.track("list", project_count=len(stats), days_filter=days or app.days or None)
    views.show_cached_indicator(app.console, from_cache)
    views.show_table(app.console, stats, app.model)


@cli.command()
@click.option("-n", "--limit", type=click.IntRange(min=1), default=5, show_default=True,
              help="Number of projects to show.")
@click.pass_obj
def recent(app: AppContext, limit):
    """Show the top projects by frecency."""
    stats, from_cache = app.get_stats()
    app.telemetry.track("recent", project_count=len(stats))
    views.show_cached_indicator(app.console, from_cache)
    views.show_recent(app.console, stats, app.frecency.get_scores(), limit, app.model)


@cli.command("open")
@click.argument("name")
@click.pass_obj
def open_project(app: AppContext, name):
    """Open a project by name (fuzzy match)."""
    match = app.find(name)
    app.telemetry.track("open", success=True)
    click.get_current_context().exit(_launch(app, match))


@cli.command()
@click.argument("name")
@click.option("-s", "--summary", is_flag=True, help="Include an AI-generated summary (runs claude -p).")
@click.pass_obj
def info(app: AppContext, name, summary):
    """Show detailed project information."""
    match = app.find(name)
    details = get_project_info(match, app.discovery.projects_root)
    text = ""
    if summary:
        app.console.print("  Generating summary...", style="dim")
        text = get_or_generate_summary(details, app.summaries)
    app.telemetry.track("info", summary=summary)
    views.show_project_info(app.console, details, text, app.model)


@cli.command()
@days_option
@click.pass_obj
def stats(app: AppContext, days):
    """Show usage summary."""
    window = days or app.days
    result, from_cache = app.get_stats(days=window, include_archived=True)
    app.telemetry.track("stats", project_count=len(result), days_filter=window or None)
    views.show_cached_indicator(app.console, from_cache)
    views.show_stats(app.console, result, window, app.model)


@cli.command()
@days_option
@click.option("-w", "--weekly", is_flag=True, help="Group by week instead of day.")
@click.pass_obj
def cost(app: AppContext, days, weekly):
    """Show cost breakdown by day or week."""
    window = days or app.days
    daily = get_cost_by_day(app.discovery.scan(), app.discovery.projects_root)
    app.telemetry.track("cost", days_filter=window or None, weekly=weekly)
    if weekly:
        views.show_weekly_cost(app.console, daily, app.model)
    else:
        views.show_daily_cost(app.console, daily, window, app.model)


@cli.command()
@click.option("-f", "--format", "fmt", type=click.Choice(sorted(EXPORTERS)), default="json",
              show_default=True, help="Output format.")
@days_option
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write to a file instead of stdout.")
@click.pass_obj
def export(app: AppContext, fmt, days, output):
    """Export project data as CSV or JSON."""
    result, _ = app.get_stats(days=days, include_archived=True)
    text = EXPORTERS[fmt](result, app.model)
    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
        app.console.print(f"Exported to {output}", style="green")
    else:
        click.echo(text)
    app.telemetry.track("export", format=fmt, project_count=len(result))


@cli.command()
@click.argument("name")
@click.pass_obj
def archive(app: AppContext, name):
    """Hide a project from the picker and list."""
    match = app.find(name)
    app.config.archive(match.project.path)
    app.telemetry.track("archive")
    app.console.print(f"Archived: {match.project.name}", style="green")
    app.console.print(f"Use '{PROG_NAME} list -a' to see archived projects", style="dim")


@cli.command()
@click.argument("name")
@click.pass_obj
def unarchive(app: AppContext, name):
    """Restore an archived project."""
    match = app.find(name)
    app.config.unarchive(match.project.path)
    app.console.print(f"Unarchived: {match.project.name}", style="green")


@cli.command("clear-cache")
@click.pass_obj
def clear_cache(app: AppContext):
    """Clear cached project data."""
    if app.cache.invalidate():
        app.console.print("Cache cleared", style="green")
    else:
        app.console.print("No cache to clear", style="dim")


@cli.command("set-base")
@click.argument("path", type=click.Path(file_okay=False))
@click.pass_obj
def set_base(app: AppContext, path):
    """Set the base directory for new projects."""
    app.config.set_project_base_dir(path)
    app.console.print(f"Base directory: {path}", style="green")


@cli.command()
@click.argument("name")
@click.option("--no-launch", is_flag=True, help="Only create the directory.")
@click.pass_obj
def new(app: AppContext, name, no_launch):
    """Create a project directory under the base directory and open it."""
    try:
        project_path = create_project(name, app.config.get_project_base_dir())
    except ProjectCreationError as e:
        raise click.ClickException(str(e)) from e

    app.console.print(f"Created {project_path}", style="green")
    if no_launch:
        return
    app.frecency.record_event(project_path)
    try:
        code = launch_claude(project_path)
    except LaunchError as e:
        raise click.ClickException(str(e)) from e
    click.get_current_context().exit(code)


@cli.command()
@click.argument("shell", type=click.Choice(["bash", "zsh", "fish"]))
def completion(shell):
    """Print a shell completion script (bash, zsh or fish)."""
    complete_var = f"_{PROG_NAME.upper()}_COMPLETE"
    comp_cls = get_completion_class(shell)
    comp = comp_cls(cli, {}, PROG_NAME, complete_var)
    click.echo(comp.source())


def main():
    cli(prog_name=PROG_NAME)
