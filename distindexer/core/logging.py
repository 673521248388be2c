"""Structured logging for the indexer — structlog events rendered by stdlib handlers.

Everything goes to stderr so the index files and the run summary are never
interleaved with log lines.
"""

from __future__ import annotations

import logging.config
import os

import structlog

LEVEL_ENV = "DIST_INDEXER_LOG_LEVEL"
FORMAT_ENV = "DIST_INDEXER_LOG_FORMAT"

# Third-party loggers that are only interesting when something goes wrong
_QUIET_LOGGERS = ("httpx", "httpcore")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _final_processors(log_format: str) -> list[structlog.types.Processor]:
    if log_format == "json":
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def _handler_config(log_level: str, log_format: str) -> dict:
    pre_chain = _pre_chain()
    loggers = {name: {"level": "WARNING"} for name in _QUIET_LOGGERS}
    loggers["distindexer"] = {"level": log_level}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "events": {
                "()": structlog.stdlib.ProcessorFormatter,
                "foreign_pre_chain": pre_chain,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    *_final_processors(log_format),
                ],
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "events",
            },
        },
        "root": {"handlers": ["stderr"], "level": log_level},
        "loggers": loggers,
    }


def setup_logging(level: str | None = None) -> None:
    """Route structlog through stdlib logging on stderr.

    *level* (e.g. ``"DEBUG"`` from ``--verbose``) wins over
    ``DIST_INDEXER_LOG_LEVEL``; ``DIST_INDEXER_LOG_FORMAT`` selects
    ``console`` (default) or ``json``.
    """
    log_level = (level or os.environ.get(LEVEL_ENV) or "INFO").upper()
    log_format = os.environ.get(FORMAT_ENV, "console").lower()

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(_handler_config(log_level, log_format))
