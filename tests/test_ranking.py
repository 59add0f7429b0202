"""Unit tests for percentage rows and minimum-sample filtering."""

from __future__ import annotations

import pytest

from domain.stats.aggregator import StatEntry, StatKind
from domain.stats.ranking import StatRow, min_games_for, percent, rows, whole_percent


def test_percent_is_zero_without_games() -> None:
    assert percent(0, 0) == 0


def test_percent_rounds_to_one_decimal() -> None:
    assert percent(1, 3) == pytest.approx(33.3)
    assert percent(2, 3) == pytest.approx(66.7)
    assert percent(1, 8) == pytest.approx(12.5)
    assert percent(3, 3) == pytest.approx(100.0)
    assert percent(0, 4) == pytest.approx(0.0)


def test_percent_rounds_half_up_at_tenths() -> None:
    # 1/16 = 6.25%, 1/1600 = 0.0625% -> 0.1
    assert percent(1, 16) == pytest.approx(6.3)
    assert percent(1, 1600) == pytest.approx(0.1)


def test_whole_percent_rounds_half_up() -> None:
    assert whole_percent(12.5) == 13
    assert whole_percent(0.5) == 1
    assert whole_percent(66.7) == 67
    assert whole_percent(33.3) == 33
    assert whole_percent(100.0) == 100


def test_rows_compute_losses_and_percent() -> None:
    result = rows({"FIRE": StatEntry(games=4, wins=3)}, StatKind.SINGLE, 5, 3)

    assert result == [StatRow(name="FIRE", games=4, wins=3, losses=1, win_percent=75.0)]


def test_rows_sorted_by_win_percent_descending() -> None:
    group = {
        "FIRE": StatEntry(games=4, wins=1),
        "WATER": StatEntry(games=4, wins=4),
        "LIFE": StatEntry(games=4, wins=2),
    }
    result = rows(group, StatKind.SINGLE, 5, 3)

    assert [row.name for row in result] == ["WATER", "LIFE", "FIRE"]
    percents = [row.win_percent for row in result]
    assert percents == sorted(percents, reverse=True)


def test_rows_break_ties_by_name() -> None:
    group = {
        "WATER": StatEntry(games=2, wins=1),
        "FIRE": StatEntry(games=4, wins=2),
        "LIFE": StatEntry(games=6, wins=3),
    }
    assert [row.name for row in rows(group, StatKind.FIRST, 5, 3)] == ["FIRE", "LIFE", "WATER"]


def test_rows_filter_pairs_and_trios_by_minimum() -> None:
    group = {
        "FIRE · WATER": StatEntry(games=5, wins=2),
        "FIRE · HATE": StatEntry(games=4, wins=4),
        "HATE · WATER": StatEntry(games=3, wins=0),
    }

    pair_rows = rows(group, StatKind.PAIR, 5, 3)
    trio_rows = rows(group, StatKind.TRIO, 5, 3)

    assert [row.name for row in pair_rows] == ["FIRE · WATER"]
    assert [row.name for row in trio_rows] == ["FIRE · HATE", "FIRE · WATER", "HATE · WATER"]
    assert all(row.games >= 5 for row in pair_rows)


def test_rows_do_not_filter_single_or_slot_groupings() -> None:
    group = {"FIRE": StatEntry(games=1, wins=0)}
    for kind in (StatKind.SINGLE, StatKind.FIRST, StatKind.SECOND):
        assert len(rows(group, kind, 100, 100)) == 1


def test_min_games_for_kind() -> None:
    assert min_games_for(StatKind.PAIR, 5, 3) == 5
    assert min_games_for(StatKind.TRIO, 5, 3) == 3
    assert min_games_for(StatKind.SECOND, 5, 3) == 0
