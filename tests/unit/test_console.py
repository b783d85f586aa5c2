"""Unit tests for console interception."""

from __future__ import annotations

import logging
import types
from typing import Any, Callable

import pytest

from karl.console import ENTRY_POINTS, ConsoleInterceptor
from karl.logger import Logger

MakeLogger = Callable[..., Logger]


def _fake_logging_module() -> types.SimpleNamespace:
    """Namespace mimicking the stdlib ``logging`` module functions."""
    calls: list[tuple[str, tuple[Any, ...]]] = []

    def make(name: str) -> Callable[..., None]:
        def native(*args: Any, **kwargs: Any) -> None:
            calls.append((name, args))

        return native

    names = [*ENTRY_POINTS, "log"]
    return types.SimpleNamespace(calls=calls, **{name: make(name) for name in names})


@pytest.fixture()
def namespace() -> types.SimpleNamespace:
    return _fake_logging_module()


@pytest.fixture()
def interceptor(make_logger: MakeLogger, namespace: types.SimpleNamespace) -> ConsoleInterceptor:
    return ConsoleInterceptor(make_logger(), target=namespace)


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class TestStateMachine:
    def test_starts_native(self, interceptor: ConsoleInterceptor) -> None:
        assert interceptor.redirected is False

    def test_enable_rebinds_every_entry_point(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace
    ) -> None:
        originals = interceptor.originals
        assert interceptor.enable() is True
        for name, original in originals.items():
            assert getattr(namespace, name) is not original

    def test_disable_restores_originals(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace
    ) -> None:
        originals = interceptor.originals
        interceptor.enable()
        assert interceptor.disable() is False
        for name, original in originals.items():
            assert getattr(namespace, name) is original

    def test_double_enable_double_disable_is_single_toggle(
        self,
        interceptor: ConsoleInterceptor,
        namespace: types.SimpleNamespace,
        records: Any,
    ) -> None:
        originals = interceptor.originals
        interceptor.redirect(True)
        bound = namespace.info
        interceptor.redirect(True)
        assert namespace.info is bound

        namespace.info("once")
        assert len(records()) == 1
        assert namespace.calls == []

        interceptor.redirect(False)
        interceptor.redirect(False)
        assert namespace.info is originals["info"]
        namespace.info("native")
        assert namespace.calls == [("info", ("native",))]
        assert len(records()) == 1

    def test_target_without_log_rejected(self, make_logger: MakeLogger) -> None:
        with pytest.raises(TypeError):
            ConsoleInterceptor(make_logger(), target=types.SimpleNamespace(info=print))

    def test_missing_entry_points_skipped(self, make_logger: MakeLogger) -> None:
        target = types.SimpleNamespace(info=print, log=print)
        interceptor = ConsoleInterceptor(make_logger(), target=target)
        assert set(interceptor.originals) == {"info", "log"}
        interceptor.enable()
        assert not hasattr(target, "warning")


# ---------------------------------------------------------------------------
# Redirected calls
# ---------------------------------------------------------------------------


class TestRedirectedCalls:
    @pytest.mark.parametrize(
        ("name", "level"),
        [
            ("debug", "DEBUG"),
            ("info", "INFO"),
            ("warning", "WARN"),
            ("warn", "WARN"),
            ("error", "ERROR"),
            ("critical", "FATAL"),
            ("fatal", "FATAL"),
        ],
    )
    def test_level_mapping(
        self,
        interceptor: ConsoleInterceptor,
        namespace: types.SimpleNamespace,
        records: Any,
        name: str,
        level: str,
    ) -> None:
        interceptor.enable()
        getattr(namespace, name)("hello %s", "there")
        [record] = records()
        assert record["level"] == level
        assert record["message"] == "hello there"

    def test_log_maps_numeric_level(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace, records: Any
    ) -> None:
        interceptor.enable()
        namespace.log(logging.WARNING, "disk at %d%%", 91)
        namespace.log(5, "very chatty")
        first, second = records()
        assert first["level"] == "WARN"
        assert first["message"] == "disk at 91%"
        assert second["level"] == "TRACE"

    def test_call_site_is_the_callers(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace, records: Any
    ) -> None:
        interceptor.enable()
        namespace.info("where")
        namespace.log(logging.INFO, "where")
        for record in records():
            assert record["fileName"] == "test_console.py"
            assert record["functionName"].endswith("test_call_site_is_the_callers")

    def test_exception_appends_traceback(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace, records: Any
    ) -> None:
        interceptor.enable()
        try:
            raise ValueError("boom")
        except ValueError:
            namespace.exception("failed")
        [record] = records()
        assert record["level"] == "ERROR"
        assert record["message"].startswith("failed Traceback (most recent call last):")
        assert "ValueError: boom" in record["message"]

    def test_exc_info_instance(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace, records: Any
    ) -> None:
        interceptor.enable()
        namespace.error("failed", exc_info=KeyError("k"))
        assert "KeyError: 'k'" in records()[0]["message"]

    def test_exc_info_without_active_exception(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace, records: Any
    ) -> None:
        interceptor.enable()
        namespace.exception("nothing raised")
        assert records()[0]["message"] == "nothing raised"

    def test_other_stdlib_keywords_ignored(
        self, interceptor: ConsoleInterceptor, namespace: types.SimpleNamespace, records: Any
    ) -> None:
        interceptor.enable()
        namespace.info("plain", extra={"a": 1}, stacklevel=2, stack_info=False)
        assert records()[0]["message"] == "plain"


# ---------------------------------------------------------------------------
# Real stdlib logging module
# ---------------------------------------------------------------------------


class TestStdlibLogging:
    def test_round_trip_on_logging_module(self, make_logger: MakeLogger, records: Any) -> None:
        original_info = logging.info
        interceptor = ConsoleInterceptor(make_logger())
        try:
            interceptor.enable()
            assert logging.info is not original_info
            logging.info("Created queue %d.", 3)
            logging.warning("careful")
        finally:
            interceptor.disable()
        assert logging.info is original_info
        assert [(r["level"], r["message"]) for r in records()] == [
            ("INFO", "Created queue 3."),
            ("WARN", "careful"),
        ]

    def test_python_format_specifiers(self, make_logger: MakeLogger, records: Any) -> None:
        interceptor = ConsoleInterceptor(make_logger())
        try:
            interceptor.enable()
            logging.info("took %.2f s", 1.234)
            logging.info("user %r", "bob")
            logging.info("n=%5d", 7)
        finally:
            interceptor.disable()
        assert [r["message"] for r in records()] == ["took 1.23 s", "user 'bob'", "n=    7"]
