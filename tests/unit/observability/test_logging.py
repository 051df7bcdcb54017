"""Unit tests for JSON logging configuration."""

from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest

from tagged_cache.observability.logging import JsonLoggerFactory
from tagged_cache.observability.logging.factory import CACHE_LOGGER


@pytest.fixture()
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    cache_level = logging.getLogger(CACHE_LOGGER).level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger(CACHE_LOGGER).setLevel(cache_level)


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    def test_configure_sets_root_level(self, restore_logging: None) -> None:
        JsonLoggerFactory.configure(level=logging.WARNING)
        assert logging.getLogger().level == logging.WARNING
        assert len(logging.getLogger().handlers) == 1

    def test_cache_level_tunes_library_loggers(self, restore_logging: None) -> None:
        JsonLoggerFactory.configure(level=logging.INFO, cache_level=logging.DEBUG)
        assert logging.getLogger(CACHE_LOGGER).level == logging.DEBUG

    def test_stdlib_records_render_as_json(
        self, restore_logging: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        JsonLoggerFactory.configure(level=logging.INFO)
        logging.getLogger("tagged_cache.application.cache.invalidation").info(
            "tagged_cache.flush_class.completed class=%s removed=%d", "standard_ref", 3
        )
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "tagged_cache.flush_class.completed class=standard_ref removed=3"
        assert payload["level"] == "info"
        assert payload["logger"] == "tagged_cache.application.cache.invalidation"
        assert "timestamp" in payload
