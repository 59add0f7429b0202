"""Tests for the CLI logging setup."""

from __future__ import annotations

import logging

import pytest

from logging_config import configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    sql_level = logging.getLogger("sqlalchemy.engine").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)


def test_unknown_log_level_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
        configure_logging(log_level="LOUD")


def test_configure_sets_levels(restore_logging) -> None:
    configure_logging(log_level="info", echo_sql=True)

    assert logging.getLogger().level == logging.INFO
    assert len(logging.getLogger().handlers) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    configure_logging(json_output=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
