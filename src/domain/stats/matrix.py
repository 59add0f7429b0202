"""Directional head-to-head matchup matrix."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from domain.common import MatchRecord, Winner
from domain.stats.aggregator import StatEntry, is_valid_match
from domain.stats.ranking import percent

MatrixData = dict[str, dict[str, float | None]]

DEFAULT_MIN_GAMES_FOR_MATRIX = 3


def tally_matchups(matches: Iterable[MatchRecord]) -> dict[tuple[str, str], StatEntry]:
    """Count games and wins for every ordered (protocol, opponent) pair.

    One match yields nine cross pairings per side. ``(a, b)`` and ``(b, a)`` are
    tallied separately from each side's own result. Matches the aggregator
    would skip are skipped here too.
    """
    tallies: dict[tuple[str, str], StatEntry] = {}

    def bump(key: tuple[str, str], won: bool) -> None:
        entry = tallies.get(key)
        if entry is None:
            entry = tallies[key] = StatEntry()
        entry.games += 1
        if won:
            entry.wins += 1

    for match in matches:
        if not is_valid_match(match):
            continue
        first_won = match.winner == Winner.FIRST
        second_won = match.winner == Winner.SECOND
        for left in match.first:
            for right in match.second:
                bump((left, right), first_won)
                bump((right, left), second_won)

    return tallies


def empty_matrix(protocols: Sequence[str]) -> MatrixData:
    return {a: {b: None for b in protocols} for a in protocols}


def matchup(
    matches: Iterable[MatchRecord],
    protocols: Sequence[str],
    min_games: int = DEFAULT_MIN_GAMES_FOR_MATRIX,
) -> MatrixData:
    """Build ``M[a][b]``: a's win percent when facing b, or None below ``min_games``.

    Each ordered pair is tallied on its own; ``M[b][a]`` is never derived from
    ``M[a][b]``. Pairs involving protocols outside ``protocols`` are dropped.
    """
    matrix = empty_matrix(protocols)
    for (a, b), entry in tally_matchups(matches).items():
        row = matrix.get(a)
        if row is None or b not in row:
            continue
        if entry.games >= min_games:
            row[b] = percent(entry.wins, entry.games)
    return matrix


__all__ = [
    "DEFAULT_MIN_GAMES_FOR_MATRIX",
    "MatrixData",
    "empty_matrix",
    "matchup",
    "tally_matchups",
]
