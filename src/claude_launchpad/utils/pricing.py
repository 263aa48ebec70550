"""Cost estimation and token/cost display formatting."""

from claude_launchpad.types.usage import TokenUsage

# Per 1M tokens, keyed by model family
MODEL_COSTS: dict[str, dict[str, float]] = {
    "opus-4":   {"input": 15.00, "output": 75.00, "cache_create": 18.75, "cache_read": 1.50},
    "sonnet-4": {"input": 3.00,  "output": 15.00, "cache_create": 3.75,  "cache_read": 0.30},
    "haiku-4":  {"input": 0.80,  "output": 4.00,  "cache_create": 1.00,  "cache_read": 0.08},
}

DEFAULT_MODEL = "sonnet-4"

TOKENS_PER_UNIT = 1_000_000


def match_model(model: str) -> dict[str, float]:
    """Resolve a model identifier to its rate table.

    Accepts family keys ("opus-4") and full ids ("claude-opus-4-6",
    "claude-sonnet-4-5-20250929"). Unknown ids get the default model's rates.
    """
    if model:
        if model in MODEL_COSTS:
            return MODEL_COSTS[model]
        for family, costs in MODEL_COSTS.items():
            if family in model:
                return costs
    return MODEL_COSTS[DEFAULT_MODEL]


def calculate_cost(usage: TokenUsage, model: str = DEFAULT_MODEL) -> float:
    """Estimated cost in USD. Not rounded."""
    costs = match_model(model)
    return (
        usage.input_tokens / TOKENS_PER_UNIT * costs["input"]
        + usage.output_tokens / TOKENS_PER_UNIT * costs["output"]
        + usage.cache_creation_input_tokens / TOKENS_PER_UNIT * costs["cache_create"]
        + usage.cache_read_input_tokens / TOKENS_PER_UNIT * costs["cache_read"]
    )


def format_cost(cost: float) -> str:
    if cost < 0.01:
        return "<$0.01"
    return f"${cost:.2f}"


def format_tokens(tokens: int) -> str:
    if tokens >= 1_000_000:
        return f"{tokens / 1_000_000:.1f}M"
    if tokens >= 1_000:
        return f"{tokens / 1_000:.1f}K"
    return str(tokens)


def format_model(model: str) -> str:
    """Short family name for a model id: claude-opus-4-6 → opus."""
    if not model:
        return ""
    for family in ("opus", "sonnet", "haiku"):
        if family in model:
            return family
    return model.split("-")[0] or model
