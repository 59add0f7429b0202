"""CSV row validation plus the import/export text format for match records."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from pathlib import Path

from domain.common import MatchPayload, MatchRecord, Trio, Winner
from domain.ratio import is_ratio_battle

BOM = "\ufeff"
HEADER_TOKEN = "WINNER"
MIN_ROW_FIELDS = 7

EXPORT_HEADERS = (
    "FIRST_1",
    "FIRST_2",
    "FIRST_3",
    "SECOND_1",
    "SECOND_2",
    "SECOND_3",
    "WINNER",
    "MATCH_DATE",
    "RATIO",
    "CREATED_AT",
    "ID",
)

_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y.%m.%d",
)


def parse_match_date(value: str | None) -> int | None:
    """Parse a date string to epoch milliseconds; None when empty or unparseable.

    Naive values are read as local time.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None

    parsed: datetime | None = None
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    try:
        return int(parsed.timestamp() * 1000)
    except (OverflowError, OSError, ValueError):
        return None


def parse_match_csv_row(
    row: Sequence[str],
    valid_protocols: Iterable[str],
    weights: Mapping[str, int],
    max_ratio: int,
) -> MatchPayload | None:
    """Validate one ``F1,F2,F3,S1,S2,S3,WINNER[,DATE]`` row.

    Returns None instead of raising when the row has too few fields, names a
    protocol outside ``valid_protocols`` or carries an unknown winner token.
    An unparseable date only drops the date.
    """
    if len(row) < MIN_ROW_FIELDS:
        return None

    fields = [field.strip().upper() for field in row]
    allowed = set(valid_protocols)
    protocols = fields[:6]
    if any(protocol not in allowed for protocol in protocols):
        return None

    try:
        winner = Winner(fields[6])
    except ValueError:
        return None

    first: Trio = (protocols[0], protocols[1], protocols[2])
    second: Trio = (protocols[3], protocols[4], protocols[5])
    date_text = fields[7] if len(fields) > 7 else None

    return MatchPayload(
        first=first,
        second=second,
        winner=winner,
        ratio=is_ratio_battle(first, second, weights, max_ratio),
        match_date=parse_match_date(date_text),
    )


def is_header_row(row: Sequence[str]) -> bool:
    return any(HEADER_TOKEN in field.upper() for field in row)


def read_csv_rows(text: str) -> list[list[str]]:
    """Split CSV text into rows, dropping a BOM, blank lines and a WINNER header."""
    if text.startswith(BOM):
        text = text[len(BOM):]

    rows = [row for row in csv.reader(io.StringIO(text.strip())) if any(field.strip() for field in row)]
    if rows and is_header_row(rows[0]):
        return rows[1:]
    return rows


def read_csv_file(path: Path) -> list[list[str]]:
    """Read a UTF-8 CSV file (BOM optional) into rows; ValueError when it is not UTF-8."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValueError(f"{path}: not a UTF-8 encoded CSV file ({exc.reason} at byte {exc.start})") from exc
    return read_csv_rows(text)


def format_match_date(value: int | None) -> str:
    if value is None:
        return ""
    moment = datetime.fromtimestamp(value / 1000)
    return f"{moment.year}/{moment.month}/{moment.day}"


def format_created_at(value: int) -> str:
    moment = datetime.fromtimestamp(value / 1000)
    return f"{moment.year}/{moment.month}/{moment.day} {moment.hour}:{moment:%M:%S}"


def match_to_csv_fields(match: MatchRecord) -> list[str]:
    return [
        *match.first,
        *match.second,
        match.winner.value,
        format_match_date(match.match_date),
        "TRUE" if match.ratio else "FALSE",
        format_created_at(match.created_at),
        match.id,
    ]


def export_matches_csv(matches: Iterable[MatchRecord]) -> str:
    """Render records as BOM-prefixed CSV with every field quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for match in matches:
        writer.writerow(match_to_csv_fields(match))
    return BOM + buffer.getvalue()


__all__ = [
    "BOM",
    "EXPORT_HEADERS",
    "export_matches_csv",
    "format_created_at",
    "format_match_date",
    "is_header_row",
    "match_to_csv_fields",
    "parse_match_csv_row",
    "parse_match_date",
    "read_csv_file",
    "read_csv_rows",
]
