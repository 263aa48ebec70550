"""Token usage counters."""

from dataclasses import dataclass


def _count(value) -> int:
    """Coerce a raw usage field to a non-negative int; anything else counts as zero."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    if isinstance(value, float) and value > 0:
        return int(value)
    return 0


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    @classmethod
    def from_raw(cls, raw: dict) -> "TokenUsage":
        """Build from a record's `message.usage` object. Missing fields are zero."""
        return cls(
            input_tokens=_count(raw.get("input_tokens")),
            output_tokens=_count(raw.get("output_tokens")),
            cache_creation_input_tokens=_count(raw.get("cache_creation_input_tokens")),
            cache_read_input_tokens=_count(raw.get("cache_read_input_tokens")),
        )

    def add(self, other: "TokenUsage") -> None:
        """Accumulate another usage into this one in place."""
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens
        self.cache_creation_input_tokens += other.cache_creation_input_tokens
        self.cache_read_input_tokens += other.cache_read_input_tokens

    @property
    def io_total(self) -> int:
        """Input plus output tokens, the figure shown in listings."""
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict[str, int]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "cache_creation_input_tokens": self.cache_creation_input_tokens,
            "cache_read_input_tokens": self.cache_read_input_tokens,
        }


# UTC calendar day ("YYYY-MM-DD") -> usage summed across all projects
DailyUsage = dict[str, TokenUsage]
