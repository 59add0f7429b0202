"""Logging setup shared by the season CLI scripts.

structlog events from the library modules and plain stdlib records (SQLAlchemy
included) go through one ``ProcessorFormatter`` on stderr, so stdout carries
only the ``key=value`` lines the scripts print.
"""

import logging
import sys

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _resolve_level(log_level: str) -> int:
    level_name = log_level.strip().upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{log_level}'. Expected one of: {', '.join(LOG_LEVELS)}")
    return getattr(logging, level_name)


def configure_logging(
    json_output: bool = False,
    log_level: str = "WARNING",
    *,
    echo_sql: bool = False,
) -> None:
    """Install the stderr handler and structlog pipeline.

    Args:
        json_output: Render one JSON object per line instead of the console
            renderer.
        log_level: Root level name, one of ``LOG_LEVELS``.
        echo_sql: Log every statement SQLAlchemy emits at INFO.
    """
    level = _resolve_level(log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if echo_sql else logging.WARNING)
