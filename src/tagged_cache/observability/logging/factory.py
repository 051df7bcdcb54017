"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

#: Loggers emitted by the cache engine; ``configure`` can tune them separately.
CACHE_LOGGER = "tagged_cache"


class JsonLoggerFactory:
    """Route stdlib logging through structlog's JSON renderer.

    Every module of the library logs through ``logging.getLogger(__name__)``
    with dotted event names (``tagged_cache.flush.completed ...``); this
    factory is what a host application calls once at startup to get those
    records as one JSON object per line.
    """

    @staticmethod
    def configure(level: int = logging.INFO, cache_level: int | None = None) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        if cache_level is not None:
            logging.getLogger(CACHE_LOGGER).setLevel(cache_level)


__all__ = ["CACHE_LOGGER", "JsonLoggerFactory"]
