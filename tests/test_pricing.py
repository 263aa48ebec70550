"""Tests for claude_launchpad.utils.pricing."""

import pytest

from claude_launchpad.types import TokenUsage
from claude_launchpad.utils.pricing import (
    DEFAULT_MODEL,
    MODEL_COSTS,
    calculate_cost,
    format_cost,
    format_model,
    format_tokens,
    match_model,
)


class TestMatchModel:
    def test_family_key(self):
        assert match_model("opus-4") is MODEL_COSTS["opus-4"]

    def test_full_model_id(self):
        assert match_model("claude-haiku-4-5-20251001") is MODEL_COSTS["haiku-4"]
        assert match_model("claude-opus-4-6") is MODEL_COSTS["opus-4"]

    def test_unknown_falls_back_to_default(self):
        assert match_model("gpt-9") is MODEL_COSTS[DEFAULT_MODEL]
        assert match_model("") is MODEL_COSTS[DEFAULT_MODEL]


class TestCalculateCost:
    def test_zero_usage_is_free(self):
        for model in MODEL_COSTS:
            assert calculate_cost(TokenUsage(), model) == 0.0

    def test_one_million_each(self):
        usage = TokenUsage(1_000_000, 1_000_000, 1_000_000, 1_000_000)
        assert calculate_cost(usage, "sonnet-4") == pytest.approx(3 + 15 + 3.75 + 0.30)
        assert calculate_cost(usage, "opus-4") == pytest.approx(15 + 75 + 18.75 + 1.50)

    def test_default_model(self):
        usage = TokenUsage(input_tokens=2_000_000)
        assert calculate_cost(usage) == pytest.approx(6.0)
        assert calculate_cost(usage, "unknown-model") == pytest.approx(6.0)

    @pytest.mark.parametrize("field", [
        "input_tokens",
        "output_tokens",
        "cache_creation_input_tokens",
        "cache_read_input_tokens",
    ])
    def test_monotonic_in_each_counter(self, field):
        base = TokenUsage(100, 200, 300, 400)
        more = TokenUsage(**{**base.to_dict(), field: getattr(base, field) + 50_000})
        for model in MODEL_COSTS:
            assert calculate_cost(more, model) > calculate_cost(base, model)

    def test_not_rounded(self):
        assert calculate_cost(TokenUsage(input_tokens=1)) == pytest.approx(3e-6)


class TestFormatCost:
    def test_below_one_cent(self):
        assert format_cost(0.0) == "<$0.01"
        assert format_cost(0.00105) == "<$0.01"

    def test_two_decimals(self):
        assert format_cost(0.01) == "$0.01"
        assert format_cost(12.344) == "$12.34"
        assert format_cost(3.5) == "$3.50"


class TestFormatTokens:
    def test_units(self):
        assert format_tokens(999) == "999"
        assert format_tokens(1_500) == "1.5K"
        assert format_tokens(2_340_000) == "2.3M"


class TestFormatModel:
    def test_families(self):
        assert format_model("claude-opus-4-6") == "opus"
        assert format_model("claude-sonnet-4-5-20250929") == "sonnet"
        assert format_model("claude-haiku-4-5") == "haiku"
        assert format_model("gpt-4o") == "gpt"
        assert format_model("") == ""
