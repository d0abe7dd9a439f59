"""Search configuration for Searchable.

Centralizes the match tiers used to weight relevance terms and the tuning
parameters of the compiler.  Tuning values are loaded from environment
variables with defaults that reproduce the classic behaviour.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Match tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchTier:
    """One strength of match: the weight multiplier and the LIKE wildcards."""

    name: str
    multiplier: int
    prefix: str = ""
    suffix: str = ""

    def pattern(self, word: str) -> str:
        return f"{self.prefix}{word}{self.suffix}"


EXACT = MatchTier("exact", 6)
STARTS_WITH = MatchTier("starts_with", 4, "", "%")
ENDS_WITH = MatchTier("ends_with", 2, "%", "")
CONTAINS = MatchTier("contains", 1, "%", "%")

# Order matters: bindings are emitted in this order.
TOKEN_TIERS: tuple[MatchTier, ...] = (EXACT, STARTS_WITH, ENDS_WITH, CONTAINS)

WHOLE_TEXT_EXACT = MatchTier("whole_text_exact", 50)
WHOLE_TEXT_CONTAINS = MatchTier("whole_text_contains", 30, "%", "%")

WHOLE_TEXT_TIERS: tuple[MatchTier, ...] = (WHOLE_TEXT_EXACT, WHOLE_TEXT_CONTAINS)


# ---------------------------------------------------------------------------
# Search tuning
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchTuning:
    """Threshold policy and diagnostics."""

    # Default threshold = contributing weight / threshold_divisor
    threshold_divisor: float = field(
        default_factory=lambda: _env_float("SEARCH_THRESHOLD_DIVISOR", 4.0),
    )
    # Log compiled SQL for every search
    debug_sql: bool = field(
        default_factory=lambda: _env_bool("SEARCH_DEBUG", default=False),
    )


search_tuning = SearchTuning()
