"""Per-category statistics for one season's records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import Category, MatchRecord
from domain.stats.aggregator import StatsResult, make_stats
from domain.stats.matrix import DEFAULT_MIN_GAMES_FOR_MATRIX, MatrixData, matchup


@dataclass(frozen=True)
class SeasonSummary:
    """Stats and matrices for the normal, ratio and combined record sets."""

    stats: dict[Category, StatsResult]
    matrices: dict[Category, MatrixData]
    sorted_matches: list[MatchRecord]


def sort_matches(matches: Sequence[MatchRecord]) -> list[MatchRecord]:
    """Newest battle date first, then newest registration; a missing date counts as 0."""
    return sorted(
        matches,
        key=lambda match: (match.match_date or 0, match.created_at),
        reverse=True,
    )


def split_by_category(matches: Sequence[MatchRecord]) -> dict[Category, list[MatchRecord]]:
    return {
        Category.NORMAL: [match for match in matches if not match.ratio],
        Category.RATIO: [match for match in matches if match.ratio],
        Category.ALL: list(matches),
    }


def summarize(
    matches: Sequence[MatchRecord],
    protocols: Sequence[str],
    *,
    min_games_for_matrix: int = DEFAULT_MIN_GAMES_FOR_MATRIX,
) -> SeasonSummary:
    subsets = split_by_category(matches)
    return SeasonSummary(
        stats={category: make_stats(subset) for category, subset in subsets.items()},
        matrices={
            category: matchup(subset, protocols, min_games_for_matrix)
            for category, subset in subsets.items()
        },
        sorted_matches=sort_matches(matches),
    )


__all__ = ["SeasonSummary", "sort_matches", "split_by_category", "summarize"]
