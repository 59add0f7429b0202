"""Match registration and CSV import pipeline for one season collection."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog

from domain.common import MatchPayload, MatchRecord, Trio, Winner, new_match_record, now_millis
from domain.csv_io import parse_match_csv_row
from domain.ratio import is_ratio_battle
from domain.season import SeasonConfig
from repositories.match_repository import MATCH_REPOSITORY, MatchRepository

logger = structlog.get_logger()


@dataclass(frozen=True)
class ImportSummary:
    """Outcome for one CSV import into a season."""

    season_name: str
    total_rows: int
    imported: int
    failed: int
    dry_run: bool


def ensure_registration_allowed(season: SeasonConfig) -> None:
    if not season.registration_allowed:
        raise ValueError(f"Season '{season.name}' does not accept new registrations")


def build_payload(
    season: SeasonConfig,
    *,
    first: Trio,
    second: Trio,
    winner: Winner,
    match_date: int | None = None,
) -> MatchPayload:
    """Validate a manual entry and classify it with the season's ratio rule."""
    allowed = set(season.protocols)
    unknown = [protocol for protocol in (*first, *second) if protocol not in allowed]
    if unknown:
        raise ValueError(f"Protocols not in season '{season.name}' roster: {unknown}")

    return MatchPayload(
        first=first,
        second=second,
        winner=winner,
        ratio=is_ratio_battle(first, second, season.weights, season.max_ratio),
        match_date=match_date,
    )


def record_match(
    *,
    session_factory,
    season: SeasonConfig,
    payload: MatchPayload,
    user_id: str | None = None,
    repository: MatchRepository = MATCH_REPOSITORY,
) -> MatchRecord:
    """Persist one new match record into the season collection."""
    ensure_registration_allowed(season)
    record = new_match_record(payload)

    with session_factory() as session:
        try:
            repository.add(session, record, collection=season.collection, user_id=user_id)
            session.commit()
        except Exception:
            session.rollback()
            raise

    logger.info("match_recorded", season=season.name, match_id=record.id, ratio=record.ratio)
    return record


def delete_match(
    *,
    session_factory,
    season: SeasonConfig,
    match_id: str,
    repository: MatchRepository = MATCH_REPOSITORY,
) -> bool:
    """Remove one record; False when the id is not in the collection."""
    ensure_registration_allowed(season)

    with session_factory() as session:
        try:
            removed = repository.remove(session, match_id, collection=season.collection)
            session.commit()
        except Exception:
            session.rollback()
            raise
    return removed


def import_csv_rows(
    *,
    session_factory,
    season: SeasonConfig,
    rows: Sequence[Sequence[str]],
    batch_size: int = 500,
    dry_run: bool = False,
    user_id: str | None = None,
    repository: MatchRepository = MATCH_REPOSITORY,
    echo: Callable[[str], None] | None = None,
) -> ImportSummary:
    """Parse rows against the season config and bulk insert the accepted ones.

    Rejected rows are counted and logged; they never abort the batch.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be greater than 0")
    ensure_registration_allowed(season)

    log = logger.bind(season=season.name)
    protocols = season.protocols
    weights = season.weights

    records: list[MatchRecord] = []
    failed = 0
    created_at = now_millis()
    for row_number, row in enumerate(rows, start=1):
        payload = parse_match_csv_row(row, protocols, weights, season.max_ratio)
        if payload is None:
            failed += 1
            log.warning("csv_row_rejected", row_number=row_number, row=",".join(row)[:50])
            continue
        records.append(new_match_record(payload, created_at=created_at))

    if dry_run:
        if echo is not None:
            echo(
                f"[dry-run] season={season.name} "
                f"total_rows={len(rows)} "
                f"accepted={len(records)} "
                f"failed={failed}"
            )
        return ImportSummary(
            season_name=season.name,
            total_rows=len(rows),
            imported=0,
            failed=failed,
            dry_run=True,
        )

    imported = 0
    with session_factory() as session:
        try:
            for start in range(0, len(records), batch_size):
                payload = records[start:start + batch_size]
                repository.add_batch(session, payload, collection=season.collection, user_id=user_id)
                imported += len(payload)
            session.commit()
        except Exception:
            session.rollback()
            raise

    log.info("csv_import_complete", total_rows=len(rows), imported=imported, failed=failed)
    if echo is not None:
        echo(
            "completed "
            f"season={season.name} "
            f"total_rows={len(rows)} "
            f"imported={imported} "
            f"failed={failed}"
        )

    return ImportSummary(
        season_name=season.name,
        total_rows=len(rows),
        imported=imported,
        failed=failed,
        dry_run=False,
    )


__all__ = [
    "ImportSummary",
    "build_payload",
    "delete_match",
    "ensure_registration_allowed",
    "import_csv_rows",
    "record_match",
]
