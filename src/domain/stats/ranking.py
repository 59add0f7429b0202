"""Percentage rows for display, filtered by minimum sample size."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from math import floor

from domain.stats.aggregator import StatEntry, StatKind


@dataclass(frozen=True)
class StatRow:
    name: str
    games: int
    wins: int
    losses: int
    win_percent: float


def percent(wins: int, games: int) -> float:
    """Win rate in percent rounded half-up to one decimal; 0 when no games."""
    if not games:
        return 0.0
    return floor((wins / games) * 1000 + 0.5) / 10


def whole_percent(value: float) -> int:
    """Round a percent half-up to a whole number for compact display."""
    return floor(value + 0.5)


def min_games_for(kind: StatKind, min_pair: int, min_trio: int) -> int:
    if kind == StatKind.PAIR:
        return min_pair
    if kind == StatKind.TRIO:
        return min_trio
    return 0


def rows(
    group: Mapping[str, StatEntry],
    kind: StatKind,
    min_pair: int,
    min_trio: int,
) -> list[StatRow]:
    """Convert one grouping into rows sorted by win percent, highest first.

    Ties are broken by name so the order does not depend on record order.
    """
    min_games = min_games_for(kind, min_pair, min_trio)
    data = [
        StatRow(
            name=name,
            games=entry.games,
            wins=entry.wins,
            losses=entry.games - entry.wins,
            win_percent=percent(entry.wins, entry.games),
        )
        for name, entry in group.items()
        if entry.games >= min_games
    ]
    data.sort(key=lambda row: (-row.win_percent, row.name))
    return data


__all__ = ["StatRow", "min_games_for", "percent", "rows", "whole_percent"]
