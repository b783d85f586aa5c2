"""conftest.py for benchmarks.

Provides a sink stream so benchmarks measure the pipeline rather than
terminal I/O, and a session event loop for the deferred-emission path.
"""

from __future__ import annotations

import asyncio

import pytest


class NullStream:
    """Write-only stream that counts lines and discards them."""

    def __init__(self) -> None:
        self.lines = 0

    def write(self, text: str) -> int:
        self.lines += 1
        return len(text)

    def flush(self) -> None:
        pass


@pytest.fixture()
def null_stream() -> NullStream:
    return NullStream()


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
