#!/usr/bin/env python3
"""Register, remove, list, import and export season match records."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.common import Trio, Winner
from domain.csv_io import export_matches_csv, format_match_date, parse_match_date, read_csv_file
from domain.pipeline import build_payload, delete_match, import_csv_rows, record_match
from domain.season import DEFAULT_SEASON_CONFIG_DIR, SeasonConfig, find_season, load_season_configs
from domain.stats.summary import sort_matches
from logging_config import configure_logging
from repositories.match_repository import ensure_match_schema, fetch_matches

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Season match record commands.",
)

SeasonOption = Annotated[
    str | None,
    typer.Option("--season", help="Season name. Defaults to the configured default season."),
]
DbUrlOption = Annotated[
    str,
    typer.Option("--db-url", help="Database URL. Defaults to a local SQLite file."),
]
ConfigDirOption = Annotated[
    Path,
    typer.Option("--config-dir", help="Directory holding season TOML files."),
]


@app.callback()
def main(
    log_level: Annotated[str, typer.Option("--log-level")] = "WARNING",
    json_logs: Annotated[bool, typer.Option("--json-logs")] = False,
    echo_sql: Annotated[bool, typer.Option("--echo-sql", help="Log SQL statements to stderr.")] = False,
) -> None:
    try:
        configure_logging(json_output=json_logs, log_level=log_level, echo_sql=echo_sql)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def _resolve_season(config_dir: Path, season_name: str | None) -> SeasonConfig:
    configs = load_season_configs(config_dir)
    try:
        return find_season(configs, season_name)
    except KeyError as exc:
        raise typer.BadParameter(str(exc), param_hint="--season") from exc


def _require_registration(season: SeasonConfig) -> None:
    if not season.registration_allowed:
        raise typer.BadParameter(
            f"Season '{season.name}' does not accept new registrations.",
            param_hint="--season",
        )


def _parse_trio(value: str, param_hint: str) -> Trio:
    protocols = [item.strip().upper() for item in value.split(",") if item.strip()]
    if len(protocols) != 3:
        raise typer.BadParameter("Expected exactly three comma-separated protocols.", param_hint=param_hint)
    return (protocols[0], protocols[1], protocols[2])


@app.command()
def seasons(config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR) -> None:
    """Print configured seasons and their resolved settings."""
    for config in load_season_configs(config_dir):
        typer.echo(f"{config.name}: {json.dumps(config.as_config_json(), sort_keys=True)}")


@app.command()
def add(
    first: Annotated[str, typer.Argument(help="First side, e.g. FIRE,WATER,HATE.")],
    second: Annotated[str, typer.Argument(help="Second side, e.g. LIFE,LIGHT,DARKNESS.")],
    winner: Annotated[Winner, typer.Argument(help="FIRST or SECOND.")],
    match_date: Annotated[
        str | None,
        typer.Option("--match-date", help="Date the battle was played, e.g. 2025/01/01."),
    ] = None,
    user_id: Annotated[str | None, typer.Option("--user-id")] = None,
    season_name: SeasonOption = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Record one battle result."""
    season = _resolve_season(config_dir, season_name)
    _require_registration(season)

    parsed_date = None
    if match_date is not None:
        parsed_date = parse_match_date(match_date)
        if parsed_date is None:
            raise typer.BadParameter(f"Unrecognised date '{match_date}'.", param_hint="--match-date")

    try:
        payload = build_payload(
            season,
            first=_parse_trio(first, "first"),
            second=_parse_trio(second, "second"),
            winner=winner,
            match_date=parsed_date,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    engine = create_db_engine(db_url)
    ensure_match_schema(engine)
    record = record_match(
        session_factory=create_session_factory(engine),
        season=season,
        payload=payload,
        user_id=user_id,
    )
    typer.echo(f"added id={record.id} season={season.name} ratio={record.ratio}")


@app.command()
def remove(
    match_id: Annotated[str, typer.Argument(help="Identifier of the match to delete.")],
    season_name: SeasonOption = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Delete one battle result."""
    season = _resolve_season(config_dir, season_name)
    _require_registration(season)

    engine = create_db_engine(db_url)
    ensure_match_schema(engine)
    removed = delete_match(
        session_factory=create_session_factory(engine),
        season=season,
        match_id=match_id,
    )
    if not removed:
        raise typer.BadParameter(f"No match '{match_id}' in season '{season.name}'.", param_hint="match_id")
    typer.echo(f"removed id={match_id} season={season.name}")


@app.command("list")
def list_matches(
    season_name: SeasonOption = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Print the season's matches, newest battle first."""
    season = _resolve_season(config_dir, season_name)
    engine = create_db_engine(db_url)
    ensure_match_schema(engine)

    with create_session_factory(engine)() as session:
        matches = fetch_matches(session, collection=season.collection)

    typer.echo(f"season={season.name} matches={len(matches)}")
    for index, match in enumerate(sort_matches(matches), start=1):
        typer.echo(
            f"{index:4d}. {', '.join(match.first):<28} vs {', '.join(match.second):<28} "
            f"winner={match.winner.value:<6} ratio={'Y' if match.ratio else '-'} "
            f"date={format_match_date(match.match_date) or '-'} id={match.id}"
        )


@app.command("import-csv")
def import_csv(
    csv_path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True)],
    season_name: SeasonOption = None,
    batch_size: Annotated[
        int,
        typer.Option("--batch-size", help="Batch size for inserting match rows."),
    ] = 500,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Validate rows without writing them."),
    ] = False,
    user_id: Annotated[str | None, typer.Option("--user-id")] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Import F1,F2,F3,S1,S2,S3,WINNER[,DATE] rows into a season."""
    if batch_size <= 0:
        raise typer.BadParameter("--batch-size must be greater than 0")
    season = _resolve_season(config_dir, season_name)
    _require_registration(season)

    try:
        rows = read_csv_file(csv_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="csv_path") from exc

    engine = create_db_engine(db_url)
    ensure_match_schema(engine)
    summary = import_csv_rows(
        session_factory=create_session_factory(engine),
        season=season,
        rows=rows,
        batch_size=batch_size,
        dry_run=dry_run,
        user_id=user_id,
        echo=typer.echo,
    )
    if summary.failed:
        typer.echo(f"warning: {summary.failed} row(s) rejected; check protocol names and winner tokens.")


@app.command("export-csv")
def export_csv(
    output: Annotated[Path, typer.Argument(dir_okay=False, writable=True)],
    season_name: SeasonOption = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Write the season's matches to a BOM-prefixed CSV file."""
    season = _resolve_season(config_dir, season_name)
    engine = create_db_engine(db_url)
    ensure_match_schema(engine)

    with create_session_factory(engine)() as session:
        matches = fetch_matches(session, collection=season.collection)

    if not matches:
        typer.echo(f"No matches to export for season='{season.name}'.")
        return

    output.write_text(export_matches_csv(matches), encoding="utf-8")
    typer.echo(f"exported matches={len(matches)} season={season.name} file={output}")


if __name__ == "__main__":
    app()
