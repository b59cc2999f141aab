"""Structured logging for the milestone tracker.

structlog renders every entry (JSON in production, ConsoleRenderer in
debug). Stdlib loggers from uvicorn, SQLAlchemy and the database drivers
go through the same formatter, and each entry carries the request's
X-Request-ID as correlation_id.
"""

import logging
import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

# Loggers that are noisy at INFO; levels can be raised per deployment
QUIET_LOGGERS = ("uvicorn.access", "aiosqlite", "aiomysql", "python_multipart")


def add_correlation_id(logger, method, event_dict):
    """Inject correlation_id from asgi-correlation-id context into every log entry."""
    cid = correlation_id.get(None)
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def library_log_levels(sql_log_level: str) -> dict[str, dict[str, str]]:
    """Per-logger levels for third-party libraries.

    sqlalchemy.engine at INFO logs every statement, replacing engine echo.
    """
    levels = {name: {"level": "WARNING"} for name in QUIET_LOGGERS}
    levels["sqlalchemy.engine"] = {"level": sql_log_level.upper()}
    levels["sqlalchemy.pool"] = {"level": sql_log_level.upper()}
    return levels


def configure_structlog(
    log_level: str = "INFO",
    json_logs: bool = True,
    sql_log_level: str = "WARNING",
) -> None:
    """Configure structlog and the stdlib bridge.

    Call this BEFORE any other app imports; structlog caches the processor
    chain on first use.

    Args:
        log_level: Root log level
        json_logs: True for JSON output, False for ConsoleRenderer
        sql_log_level: Level for sqlalchemy.engine / sqlalchemy.pool
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["default"], "level": log_level.upper()},
        "loggers": library_log_levels(sql_log_level),
    })

    structlog.configure(
        processors=shared_processors + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
