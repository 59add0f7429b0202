"""Shared types for battle records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

Trio = tuple[str, str, str]


class Winner(str, Enum):
    """Which side of a battle won."""

    FIRST = "FIRST"
    SECOND = "SECOND"


class Category(str, Enum):
    """Record subsets that statistics are computed over."""

    NORMAL = "normal"
    RATIO = "ratio"
    ALL = "all"


@dataclass(frozen=True)
class MatchPayload:
    """Match data before an id and registration time are assigned."""

    first: Trio
    second: Trio
    winner: Winner
    ratio: bool
    match_date: int | None = None


@dataclass(frozen=True)
class MatchRecord:
    """Canonical persisted battle result consumed by the statistics engine."""

    id: str
    first: Trio
    second: Trio
    winner: Winner
    ratio: bool
    created_at: int
    match_date: int | None = None


def now_millis() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


def new_match_record(payload: MatchPayload, *, created_at: int | None = None) -> MatchRecord:
    """Assign a fresh id and registration timestamp to a payload."""
    return MatchRecord(
        id=uuid4().hex,
        first=payload.first,
        second=payload.second,
        winner=payload.winner,
        ratio=payload.ratio,
        created_at=now_millis() if created_at is None else created_at,
        match_date=payload.match_date,
    )


__all__ = [
    "Category",
    "MatchPayload",
    "MatchRecord",
    "Trio",
    "Winner",
    "new_match_record",
    "now_millis",
]
