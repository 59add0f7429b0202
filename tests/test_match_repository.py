"""Tests for match persistence against in-memory SQLite."""

from __future__ import annotations

from domain.common import MatchRecord, Winner
from repositories.match_repository import (
    add_match,
    add_matches,
    count_matches,
    fetch_matches,
    remove_match,
)


def _record(match_id: str, created_at: int, *, match_date: int | None = None) -> MatchRecord:
    return MatchRecord(
        id=match_id,
        first=("FIRE", "WATER", "HATE"),
        second=("LIFE", "LIGHT", "DARKNESS"),
        winner=Winner.SECOND,
        ratio=True,
        created_at=created_at,
        match_date=match_date,
    )


def test_add_and_fetch_round_trips_record(session_factory) -> None:
    record = _record("a1", 1_000, match_date=2_000)

    with session_factory() as session:
        add_match(session, record, collection="s1", user_id="user-1")
        session.commit()

    with session_factory() as session:
        fetched = fetch_matches(session, collection="s1")

    assert fetched == [record]


def test_fetch_is_scoped_to_collection(session_factory) -> None:
    with session_factory() as session:
        add_matches(session, [_record("a1", 1), _record("a2", 2)], collection="s1")
        add_matches(session, [_record("b1", 3)], collection="s2")
        session.commit()

    with session_factory() as session:
        assert [match.id for match in fetch_matches(session, collection="s1")] == ["a1", "a2"]
        assert [match.id for match in fetch_matches(session, collection="s2")] == ["b1"]
        assert count_matches(session, collection="s1") == 2
        assert count_matches(session) == 3


def test_add_matches_with_empty_batch_is_noop(session_factory) -> None:
    with session_factory() as session:
        add_matches(session, [], collection="s1")
        session.commit()
        assert count_matches(session) == 0


def test_remove_match(session_factory) -> None:
    with session_factory() as session:
        add_matches(session, [_record("a1", 1), _record("a2", 2)], collection="s1")
        session.commit()

    with session_factory() as session:
        assert remove_match(session, "a1", collection="s1") is True
        assert remove_match(session, "a1", collection="s1") is False
        assert remove_match(session, "a2", collection="other") is False
        session.commit()

    with session_factory() as session:
        assert [match.id for match in fetch_matches(session, collection="s1")] == ["a2"]
