"""Shared fixtures for the karl test suite."""

from __future__ import annotations

import io
import json
from typing import Any, Callable

import pytest

import karl
from karl.config import LoggerOptions
from karl.logger import Logger


@pytest.fixture(autouse=True)
def _native_console() -> Any:
    """Keep the stdlib ``logging`` functions un-redirected around every test."""
    karl.set_options(redirect_console=False)
    yield
    karl.set_options(redirect_console=False)


@pytest.fixture()
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def make_logger(stream: io.StringIO) -> Callable[..., Logger]:
    """Factory for loggers writing to the ``stream`` fixture."""

    def _make(**options: Any) -> Logger:
        options.setdefault("redirect_console", False)
        return Logger(LoggerOptions(**options), stream=stream)

    return _make


@pytest.fixture()
def lines(stream: io.StringIO) -> Callable[[], list[str]]:
    """Lines written to the ``stream`` fixture so far."""
    return lambda: stream.getvalue().splitlines()


@pytest.fixture()
def records(stream: io.StringIO) -> Callable[[], list[dict[str, Any]]]:
    """JSON records written to the ``stream`` fixture so far."""
    return lambda: [json.loads(line) for line in stream.getvalue().splitlines()]
