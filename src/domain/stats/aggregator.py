"""Win/game aggregation across single, pair, trio and slot groupings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations

import structlog

from domain.common import MatchRecord, Winner
from domain.stats.keys import canonical_key

logger = structlog.get_logger()


class StatKind(str, Enum):
    """The five groupings produced by the aggregator."""

    SINGLE = "single"
    PAIR = "pair"
    TRIO = "trio"
    FIRST = "first"
    SECOND = "second"


@dataclass
class StatEntry:
    games: int = 0
    wins: int = 0


@dataclass
class StatsResult:
    """Grouped counts keyed by protocol or canonical combination key."""

    single: dict[str, StatEntry] = field(default_factory=dict)
    pair: dict[str, StatEntry] = field(default_factory=dict)
    trio: dict[str, StatEntry] = field(default_factory=dict)
    first: dict[str, StatEntry] = field(default_factory=dict)
    second: dict[str, StatEntry] = field(default_factory=dict)

    def group(self, kind: StatKind) -> dict[str, StatEntry]:
        return getattr(self, kind.value)


def is_valid_match(match: MatchRecord) -> bool:
    """Both sides must be exactly three protocols long."""
    return _is_trio(match.first) and _is_trio(match.second)


def _is_trio(side: object) -> bool:
    return isinstance(side, Sequence) and not isinstance(side, str) and len(side) == 3


def _bump(group: dict[str, StatEntry], key: str, won: bool) -> None:
    entry = group.get(key)
    if entry is None:
        entry = group[key] = StatEntry()
    entry.games += 1
    if won:
        entry.wins += 1


def make_stats(matches: Iterable[MatchRecord]) -> StatsResult:
    """Aggregate every valid match into the five groupings.

    Each side of a match contributes independently. Repeated protocols inside a
    trio are not deduplicated: ``[FIRE, FIRE, HATE]`` adds two single games for
    FIRE and forms the pairs ``FIRE · FIRE`` and ``FIRE · HATE`` (twice).
    """
    stats = StatsResult()

    for match in matches:
        if not is_valid_match(match):
            logger.warning("invalid_match_skipped", match_id=getattr(match, "id", None))
            continue

        sides = (
            (match.first, match.winner == Winner.FIRST, stats.first),
            (match.second, match.winner == Winner.SECOND, stats.second),
        )
        for trio, won, slot_group in sides:
            for protocol in trio:
                _bump(stats.single, protocol, won)
                _bump(slot_group, protocol, won)

            for pair in combinations(trio, 2):
                _bump(stats.pair, canonical_key(pair), won)

            _bump(stats.trio, canonical_key(trio), won)

    return stats


__all__ = ["StatEntry", "StatKind", "StatsResult", "is_valid_match", "make_stats"]
