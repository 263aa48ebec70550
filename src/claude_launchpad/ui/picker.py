"""Interactive project picker."""

import questionary
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings

from claude_launchpad.services.frecency import sort_by_frecency
from claude_launchpad.types import ProjectStatistics, SessionPreview
from claude_launchpad.utils.date_grouping import ActivityLevel, format_relative_date, get_activity_level
from claude_launchpad.utils.pricing import DEFAULT_MODEL, calculate_cost, format_cost, format_model, format_tokens

ACTIVITY_SYMBOLS = {
    ActivityLevel.HOT: "●",
    ActivityLevel.WARM: "◐",
    ActivityLevel.COLD: "◌",
    ActivityLevel.FROZEN: "○",
}

PREVIEW_SNIPPET = 40


def format_preview(preview: SessionPreview | None) -> str:
    """One-line description of a project's last session: model | tokens | "first prompt"."""
    if preview is None:
        return ""
    parts = []
    if preview.model:
        parts.append(format_model(preview.model))
    tokens = preview.input_tokens + preview.output_tokens
    if tokens > 0:
        parts.append(format_tokens(tokens))
    if preview.first_user_message:
        message = preview.first_user_message.replace("\n", " ")
        ellipsis = "..." if len(message) > PREVIEW_SNIPPET else ""
        parts.append(f'"{message[:PREVIEW_SNIPPET]}{ellipsis}"')
    return " | ".join(parts)


def format_choice_title(stats: ProjectStatistics, score: int, model: str = DEFAULT_MODEL) -> str:
    symbol = ACTIVITY_SYMBOLS[get_activity_level(stats.last_activity)]
    last = format_relative_date(stats.last_activity)
    cost = format_cost(calculate_cost(stats.usage, model))
    title = f"{symbol} {stats.project.name:<26.26} {last:>10} {cost:>8}"
    if score:
        title += f" [{score}]"
    return title


def build_choices(
    stats: list[ProjectStatistics],
    scores: dict[str, int],
    previews: dict[str, SessionPreview | None] | None = None,
    model: str = DEFAULT_MODEL,
) -> list[questionary.Choice]:
    """Picker entries in frecency order."""
    previews = previews or {}
    choices = []
    for s in sort_by_frecency(stats, scores):
        description = format_preview(previews.get(s.project.path))
        choices.append(questionary.Choice(
            title=format_choice_title(s, scores.get(s.project.path, 0), model),
            value=s,
            description=description or None,
        ))
    return choices


def pick_project(
    stats: list[ProjectStatistics],
    scores: dict[str, int],
    previews: dict[str, SessionPreview | None] | None = None,
    model: str = DEFAULT_MODEL,
) -> ProjectStatistics | None:
    """Ask the user to choose a project. Esc or Ctrl-C returns None."""
    question = questionary.select(
        "Select project:",
        choices=build_choices(stats, scores, previews, model),
        instruction="(j/k, enter, esc)",
        use_jk_keys=True,
    )

    escape = KeyBindings()

    @escape.add("escape", eager=True)
    def _cancel(event):
        event.app.exit(exception=KeyboardInterrupt, style="class:aborting")

    question.application.key_bindings = merge_key_bindings(
        [question.application.key_bindings, escape]
    )
    return question.ask()
