"""Load season definitions from TOML files."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.rosters import PROTOCOL_SETS, RATIO_SETS, get_protocol_set, get_ratio_set
from domain.stats.matrix import DEFAULT_MIN_GAMES_FOR_MATRIX

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_SEASON_CONFIG_DIR = ROOT_DIR / "configs" / "seasons"


@dataclass(frozen=True)
class StatThresholds:
    min_games_for_pair: int = 5
    min_games_for_trio: int = 3
    min_games_for_matrix: int = DEFAULT_MIN_GAMES_FOR_MATRIX


@dataclass(frozen=True)
class SeasonConfig:
    """One season collection: its roster, weight table and display thresholds."""

    name: str
    description: str | None
    file_path: Path
    roster_set: str
    ratio_set: str
    max_ratio: int
    registration_allowed: bool
    is_default: bool
    thresholds: StatThresholds

    @property
    def collection(self) -> str:
        return self.name

    @property
    def protocols(self) -> tuple[str, ...]:
        return get_protocol_set(self.roster_set)

    @property
    def weights(self) -> Mapping[str, int]:
        return get_ratio_set(self.ratio_set)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "roster_set": self.roster_set,
            "ratio_set": self.ratio_set,
            "max_ratio": self.max_ratio,
            "registration_allowed": self.registration_allowed,
            "default": self.is_default,
            "min_games_for_pair": self.thresholds.min_games_for_pair,
            "min_games_for_trio": self.thresholds.min_games_for_trio,
            "min_games_for_matrix": self.thresholds.min_games_for_matrix,
        }


def load_season_configs(config_dir: Path = DEFAULT_SEASON_CONFIG_DIR) -> list[SeasonConfig]:
    """Load and validate all season TOML config files in a directory.

    Season names double as collection names, so they must be unique, and at
    most one file may set ``default = true``.
    """
    if not config_dir.exists():
        raise FileNotFoundError(f"Season config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Season config path is not a directory: {config_dir}")

    season_files = sorted(config_dir.glob("*.toml"))
    if not season_files:
        raise ValueError(f"No .toml season files found in: {config_dir}")

    seasons: list[SeasonConfig] = []
    for file_path in season_files:
        with file_path.open("rb") as file:
            seasons.append(_parse_season_config(tomllib.load(file), file_path))

    names = [season.name for season in seasons]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate season names found in {config_dir}: {names}")

    defaults = [season.name for season in seasons if season.is_default]
    if len(defaults) > 1:
        raise ValueError(f"More than one default season in {config_dir}: {defaults}")
    return seasons


def default_season(configs: Sequence[SeasonConfig]) -> SeasonConfig:
    """Return the flagged default season, else the first loaded one."""
    if not configs:
        raise ValueError("No season configs loaded")
    for config in configs:
        if config.is_default:
            return config
    return configs[0]


def find_season(configs: Sequence[SeasonConfig], name: str | None) -> SeasonConfig:
    if name is None:
        return default_season(configs)
    for config in configs:
        if config.name == name:
            return config
    available = ", ".join(config.name for config in configs)
    raise KeyError(f"Unknown season '{name}'. Available: {available}")


def _parse_season_config(raw: dict[str, Any], file_path: Path) -> SeasonConfig:
    season_raw = raw.get("season", {})
    ratio_raw = raw.get("ratio", {})
    stats_raw = raw.get("stats", {})

    name = str(season_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [season].name is required")

    description_value = season_raw.get("description")
    description = None if description_value is None else str(description_value)

    roster_set = str(season_raw.get("roster_set", "V1_AUX"))
    if roster_set not in PROTOCOL_SETS:
        raise ValueError(f"{file_path}: [season].roster_set '{roster_set}' is not a known roster set")

    ratio_set = str(season_raw.get("ratio_set", "V1"))
    if ratio_set not in RATIO_SETS:
        raise ValueError(f"{file_path}: [season].ratio_set '{ratio_set}' is not a known ratio set")

    max_ratio = int(ratio_raw.get("max_ratio", 8))
    if max_ratio < 0:
        raise ValueError(f"{file_path}: [ratio].max_ratio must be >= 0")

    thresholds = StatThresholds(
        min_games_for_pair=int(stats_raw.get("min_games_for_pair", 5)),
        min_games_for_trio=int(stats_raw.get("min_games_for_trio", 3)),
        min_games_for_matrix=int(stats_raw.get("min_games_for_matrix", DEFAULT_MIN_GAMES_FOR_MATRIX)),
    )
    _validate_thresholds(file_path=file_path, thresholds=thresholds)

    return SeasonConfig(
        name=name,
        description=description,
        file_path=file_path,
        roster_set=roster_set,
        ratio_set=ratio_set,
        max_ratio=max_ratio,
        registration_allowed=bool(season_raw.get("registration_allowed", True)),
        is_default=bool(season_raw.get("default", False)),
        thresholds=thresholds,
    )


def _validate_thresholds(*, file_path: Path, thresholds: StatThresholds) -> None:
    if thresholds.min_games_for_pair < 0:
        raise ValueError(f"{file_path}: [stats].min_games_for_pair must be >= 0")
    if thresholds.min_games_for_trio < 0:
        raise ValueError(f"{file_path}: [stats].min_games_for_trio must be >= 0")
    if thresholds.min_games_for_matrix < 1:
        raise ValueError(f"{file_path}: [stats].min_games_for_matrix must be >= 1")


__all__ = [
    "DEFAULT_SEASON_CONFIG_DIR",
    "SeasonConfig",
    "StatThresholds",
    "default_season",
    "find_season",
    "load_season_configs",
]
