"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from domain.season import SeasonConfig, StatThresholds
from repositories.match_repository import ensure_match_schema


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine with the matches table created."""
    engine = create_db_engine("sqlite://")
    ensure_match_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture
def season() -> SeasonConfig:
    return SeasonConfig(
        name="test_season",
        description=None,
        file_path=Path("test_season.toml"),
        roster_set="V1_AUX",
        ratio_set="V1",
        max_ratio=8,
        registration_allowed=True,
        is_default=True,
        thresholds=StatThresholds(),
    )
