"""Unit tests for the five-way win/game aggregator."""

from __future__ import annotations

from domain.common import MatchRecord, Winner
from domain.stats.aggregator import StatEntry, StatKind, make_stats
from domain.stats.keys import KEY_SEPARATOR, canonical_key


def _match(
    match_id: str,
    first: tuple[str, ...],
    second: tuple[str, ...],
    winner: Winner,
    *,
    ratio: bool = False,
) -> MatchRecord:
    return MatchRecord(
        id=match_id,
        first=first,  # type: ignore[arg-type]
        second=second,  # type: ignore[arg-type]
        winner=winner,
        ratio=ratio,
        created_at=1_700_000_000_000,
    )


FIRST_TRIO = ("FIRE", "WATER", "HATE")
SECOND_TRIO = ("LIFE", "LIGHT", "DARKNESS")


def test_canonical_key_sorts_and_joins() -> None:
    assert canonical_key(("WATER", "FIRE")) == "FIRE · WATER"
    assert canonical_key(("WATER", "HATE", "FIRE")) == "FIRE · HATE · WATER"
    assert KEY_SEPARATOR == " · "


def test_canonical_key_is_order_independent() -> None:
    assert canonical_key(("LIFE", "DARKNESS", "LIGHT")) == canonical_key(("LIGHT", "LIFE", "DARKNESS"))


def test_aggregates_wins_and_games_for_both_sides() -> None:
    stats = make_stats(
        [
            _match("1", FIRST_TRIO, SECOND_TRIO, Winner.FIRST),
            _match("2", FIRST_TRIO, SECOND_TRIO, Winner.SECOND),
        ]
    )

    assert stats.single["FIRE"] == StatEntry(games=2, wins=1)
    assert stats.single["LIFE"] == StatEntry(games=2, wins=1)
    assert stats.pair["FIRE · WATER"].games == 2
    assert stats.pair["FIRE · WATER"].wins == 1


def test_counts_three_pairs_and_one_trio_per_side() -> None:
    stats = make_stats([_match("1", FIRST_TRIO, SECOND_TRIO, Winner.FIRST)])

    assert set(stats.pair) == {
        "FIRE · WATER",
        "FIRE · HATE",
        "HATE · WATER",
        "LIFE · LIGHT",
        "DARKNESS · LIFE",
        "DARKNESS · LIGHT",
    }
    assert stats.trio == {
        "FIRE · HATE · WATER": StatEntry(games=1, wins=1),
        "DARKNESS · LIFE · LIGHT": StatEntry(games=1, wins=0),
    }


def test_slot_groupings_follow_side() -> None:
    stats = make_stats(
        [
            _match("1", FIRST_TRIO, SECOND_TRIO, Winner.FIRST),
            _match("2", SECOND_TRIO, FIRST_TRIO, Winner.FIRST),
        ]
    )

    assert stats.first["FIRE"] == StatEntry(games=1, wins=1)
    assert stats.second["FIRE"] == StatEntry(games=1, wins=0)
    assert stats.first["LIFE"] == StatEntry(games=1, wins=1)
    assert stats.second["LIFE"] == StatEntry(games=1, wins=0)
    assert stats.single["FIRE"] == StatEntry(games=2, wins=1)
    assert stats.group(StatKind.FIRST) is stats.first


def test_skips_matches_with_wrong_sized_trio() -> None:
    stats = make_stats(
        [
            _match("bad", ("FIRE", "WATER"), SECOND_TRIO, Winner.FIRST),
            _match("bad2", FIRST_TRIO, ("LIFE", "LIGHT", "DARKNESS", "METAL"), Winner.SECOND),
            _match("ok", FIRST_TRIO, SECOND_TRIO, Winner.FIRST),
        ]
    )

    assert stats.single["LIFE"] == StatEntry(games=1, wins=0)
    assert stats.single["FIRE"] == StatEntry(games=1, wins=1)
    assert "METAL" not in stats.single


def test_repeated_protocol_in_trio_is_counted_per_occurrence() -> None:
    stats = make_stats(
        [
            _match("1", ("FIRE", "FIRE", "HATE"), SECOND_TRIO, Winner.FIRST),
            _match("2", ("WATER", "HATE", "FIRE"), SECOND_TRIO, Winner.FIRST),
        ]
    )

    # The duplicate record is kept, so LIFE played twice.
    assert stats.single["LIFE"] == StatEntry(games=2, wins=0)
    assert stats.single["FIRE"] == StatEntry(games=3, wins=3)
    assert stats.first["FIRE"] == StatEntry(games=3, wins=3)
    assert stats.pair["FIRE · FIRE"] == StatEntry(games=1, wins=1)
    assert stats.pair["FIRE · HATE"] == StatEntry(games=3, wins=3)
    assert stats.trio["FIRE · FIRE · HATE"] == StatEntry(games=1, wins=1)


def test_single_games_equal_side_occurrences() -> None:
    matches = [
        _match("1", ("FIRE", "WATER", "HATE"), ("FIRE", "LIGHT", "METAL"), Winner.FIRST),
        _match("2", ("METAL", "METAL", "LIFE"), ("WATER", "FIRE", "SPEED"), Winner.SECOND),
        _match("3", ("SPEED", "LIFE", "LOVE"), ("LOVE", "HATE", "APATHY"), Winner.SECOND),
    ]
    stats = make_stats(matches)

    for protocol, entry in stats.single.items():
        occurrences = sum(
            side.count(protocol) for match in matches for side in (match.first, match.second)
        )
        assert entry.games == occurrences
    assert stats.single["METAL"].games == 3


def test_result_is_independent_of_record_order() -> None:
    matches = [
        _match("1", ("FIRE", "WATER", "HATE"), ("LIFE", "LIGHT", "METAL"), Winner.FIRST),
        _match("2", ("METAL", "SPIRIT", "LIFE"), ("WATER", "FIRE", "SPEED"), Winner.SECOND),
        _match("3", ("SPEED", "LIFE", "LOVE"), ("LOVE", "HATE", "APATHY"), Winner.FIRST),
    ]

    forward = make_stats(matches)
    backward = make_stats(list(reversed(matches)))

    for kind in StatKind:
        assert forward.group(kind) == backward.group(kind)


def test_empty_input_produces_empty_groups() -> None:
    stats = make_stats([])
    for kind in StatKind:
        assert stats.group(kind) == {}
