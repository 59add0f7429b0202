#!/usr/bin/env python3
"""Show win-rate tables, matchup matrices and the ratio table for a season."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.common import Category, MatchRecord
from domain.ratio import group_by_weight
from domain.rosters import abbreviation
from domain.season import DEFAULT_SEASON_CONFIG_DIR, SeasonConfig, find_season, load_season_configs
from domain.stats.aggregator import StatKind
from domain.stats.ranking import rows, whole_percent
from domain.stats.summary import summarize
from logging_config import configure_logging
from repositories.match_repository import ensure_match_schema, fetch_matches

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Query season statistics.",
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
CategoryOption = Annotated[
    Category,
    typer.Option("--category", help="Record subset (normal, ratio, all)."),
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


def _load(config_dir: Path, season_name: str | None, db_url: str) -> tuple[SeasonConfig, list[MatchRecord]]:
    configs = load_season_configs(config_dir)
    try:
        season = find_season(configs, season_name)
    except KeyError as exc:
        raise typer.BadParameter(str(exc), param_hint="--season") from exc

    engine = create_db_engine(db_url)
    ensure_match_schema(engine)
    with create_session_factory(engine)() as session:
        matches = fetch_matches(session, collection=season.collection)
    return season, matches


@app.command()
def table(
    kind: Annotated[
        StatKind,
        typer.Argument(help="Grouping (single, pair, trio, first, second)."),
    ] = StatKind.SINGLE,
    category: CategoryOption = Category.ALL,
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of rows to print. Use 0 for all."),
    ] = 0,
    season_name: SeasonOption = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Print win-rate rows for one grouping, highest win rate first."""
    if top_n < 0:
        raise typer.BadParameter("--top-n must be >= 0")

    season, matches = _load(config_dir, season_name, db_url)
    summary = summarize(
        matches,
        season.protocols,
        min_games_for_matrix=season.thresholds.min_games_for_matrix,
    )
    stat_rows = rows(
        summary.stats[category].group(kind),
        kind,
        season.thresholds.min_games_for_pair,
        season.thresholds.min_games_for_trio,
    )
    if top_n:
        stat_rows = stat_rows[:top_n]

    if not stat_rows:
        typer.echo(f"No rows for season='{season.name}' category={category.value} kind={kind.value}.")
        return

    typer.echo(f"season={season.name} category={category.value} kind={kind.value} rows={len(stat_rows)}")
    for index, row in enumerate(stat_rows, start=1):
        typer.echo(
            f"{index:3d}. {row.name:<32} games={row.games:4d} wins={row.wins:4d} "
            f"losses={row.losses:4d} wr={row.win_percent:5.1f}%"
        )


@app.command()
def matrix(
    category: CategoryOption = Category.ALL,
    season_name: SeasonOption = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Print the row-vs-column win percent matrix; '-' marks too few games."""
    season, matches = _load(config_dir, season_name, db_url)
    summary = summarize(
        matches,
        season.protocols,
        min_games_for_matrix=season.thresholds.min_games_for_matrix,
    )
    data = summary.matrices[category]
    protocols = season.protocols

    typer.echo(
        f"season={season.name} category={category.value} "
        f"min_games={season.thresholds.min_games_for_matrix}"
    )
    typer.echo("PRO " + " ".join(f"{abbreviation(p):>4}" for p in protocols))
    for a in protocols:
        cells = []
        for b in protocols:
            value = data[a][b]
            cells.append(f"{'-':>4}" if value is None else f"{whole_percent(value):4d}")
        typer.echo(f"{abbreviation(a):<4}" + " ".join(cells))


@app.command()
def ratios(
    season_name: SeasonOption = None,
    config_dir: ConfigDirOption = DEFAULT_SEASON_CONFIG_DIR,
) -> None:
    """Print the season roster grouped by ratio weight."""
    configs = load_season_configs(config_dir)
    try:
        season = find_season(configs, season_name)
    except KeyError as exc:
        raise typer.BadParameter(str(exc), param_hint="--season") from exc

    typer.echo(f"season={season.name} ratio_set={season.ratio_set} max_ratio={season.max_ratio}")
    for weight, protocols in group_by_weight(season.protocols, season.weights):
        typer.echo(f"{weight}: {', '.join(protocols)}")


if __name__ == "__main__":
    app()
