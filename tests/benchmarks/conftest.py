"""conftest.py for benchmarks.

Provides a session-scoped event loop so every benchmark shares one loop,
which keeps loop start-up cost out of the timings.
"""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture(scope="session")
def event_loop():
    """Session-scoped event loop shared by all async benchmark helpers."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture(scope="session")
def run_async(event_loop):
    """Helper that executes a coroutine in the session event loop."""

    def _run(coro):
        return event_loop.run_until_complete(coro)

    return _run
