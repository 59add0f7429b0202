"""Persistence helpers for season match collections."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import MatchRecord, Winner
from models import Base, Match


def _match_record_to_row(record: MatchRecord, collection: str, user_id: str | None) -> dict[str, Any]:
    return {
        "id": record.id,
        "collection": collection,
        "first_1": record.first[0],
        "first_2": record.first[1],
        "first_3": record.first[2],
        "second_1": record.second[0],
        "second_2": record.second[1],
        "second_3": record.second[2],
        "winner": record.winner.value,
        "ratio": record.ratio,
        "created_at": record.created_at,
        "match_date": record.match_date,
        "user_id": user_id,
    }


def _row_to_match_record(row: Match) -> MatchRecord:
    return MatchRecord(
        id=row.id,
        first=(row.first_1, row.first_2, row.first_3),
        second=(row.second_1, row.second_2, row.second_3),
        winner=Winner(row.winner),
        ratio=bool(row.ratio),
        created_at=int(row.created_at),
        match_date=None if row.match_date is None else int(row.match_date),
    )


class MatchRepository:
    """Append/remove/list operations for one table of match records."""

    def __init__(self, *, model: type[Match] = Match) -> None:
        self.model = model

    def ensure_schema(self, engine: Engine) -> None:
        """Create the matches table and its indexes if they do not exist."""
        Base.metadata.create_all(bind=engine, tables=[self.model.__table__])

    def add(
        self,
        session: Session,
        record: MatchRecord,
        *,
        collection: str,
        user_id: str | None = None,
    ) -> None:
        session.execute(insert(self.model), [_match_record_to_row(record, collection, user_id)])

    def add_batch(
        self,
        session: Session,
        records: Sequence[MatchRecord],
        *,
        collection: str,
        user_id: str | None = None,
    ) -> None:
        """Bulk insert records into one collection."""
        if not records:
            return
        payload = [_match_record_to_row(record, collection, user_id) for record in records]
        session.execute(insert(self.model), payload)

    def remove(self, session: Session, match_id: str, *, collection: str) -> bool:
        result = session.execute(
            delete(self.model).where(
                self.model.id == match_id,
                self.model.collection == collection,
            )
        )
        return bool(result.rowcount)

    def fetch(self, session: Session, *, collection: str) -> list[MatchRecord]:
        """Fetch a collection in insertion-independent, deterministic order."""
        statement = (
            select(self.model)
            .where(self.model.collection == collection)
            .order_by(self.model.created_at, self.model.id)
        )
        return [_row_to_match_record(row) for row in session.scalars(statement)]

    def count(self, session: Session, *, collection: str | None = None) -> int:
        statement = select(func.count()).select_from(self.model)
        if collection is not None:
            statement = statement.where(self.model.collection == collection)
        result = session.scalar(statement)
        return int(result or 0)


MATCH_REPOSITORY = MatchRepository()


def ensure_match_schema(engine: Engine) -> None:
    """Create the matches table if needed."""
    MATCH_REPOSITORY.ensure_schema(engine)


def add_match(
    session: Session,
    record: MatchRecord,
    *,
    collection: str,
    user_id: str | None = None,
) -> None:
    """Insert one match record."""
    MATCH_REPOSITORY.add(session, record, collection=collection, user_id=user_id)


def add_matches(
    session: Session,
    records: Sequence[MatchRecord],
    *,
    collection: str,
    user_id: str | None = None,
) -> None:
    """Bulk insert match records."""
    MATCH_REPOSITORY.add_batch(session, records, collection=collection, user_id=user_id)


def remove_match(session: Session, match_id: str, *, collection: str) -> bool:
    """Delete one match; False when the id is not in the collection."""
    return MATCH_REPOSITORY.remove(session, match_id, collection=collection)


def fetch_matches(session: Session, *, collection: str) -> list[MatchRecord]:
    """Fetch every match record in a collection."""
    return MATCH_REPOSITORY.fetch(session, collection=collection)


def count_matches(session: Session, *, collection: str | None = None) -> int:
    """Count matches in one collection or across all collections."""
    return MATCH_REPOSITORY.count(session, collection=collection)
