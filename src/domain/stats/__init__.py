"""Statistics aggregation engine."""

from domain.stats.aggregator import StatEntry, StatKind, StatsResult, make_stats
from domain.stats.keys import KEY_SEPARATOR, canonical_key
from domain.stats.matrix import MatrixData, matchup
from domain.stats.ranking import StatRow, percent, rows
from domain.stats.summary import SeasonSummary, sort_matches, summarize

__all__ = [
    "KEY_SEPARATOR",
    "MatrixData",
    "SeasonSummary",
    "StatEntry",
    "StatKind",
    "StatRow",
    "StatsResult",
    "canonical_key",
    "make_stats",
    "matchup",
    "percent",
    "rows",
    "sort_matches",
    "summarize",
]
