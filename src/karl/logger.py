"""Logger core.

A :class:`Logger` exposes one method per severity.  Each call captures
its call site, a timestamp and the active options synchronously, then
defers message formatting, event assembly, enrichment, rendering and
the write to the :class:`~karl.pipeline.scheduler.DeferredScheduler`.
Because capture happens before scheduling and the scheduler is FIFO,
lines appear on the stream in call order and carry the true caller's
location.

Usage::

    from karl.logger import Logger

    log = Logger()
    log.info("Created queue %d.", 3)
    log.warn("low disk", {"free": "2%"})
"""
from __future__ import annotations

import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import IO, Any, Callable

from karl._diagnostics import get_logger
from karl.config.options import DEFAULT_OPTIONS, LoggerOptions
from karl.errors import ConfigError
from karl.pipeline.callsite import EMPTY_CALL_SITE, CallSite, CallSiteResolver
from karl.pipeline.colors import colorize_level
from karl.pipeline.event import PROCESS, LogEvent, ProcessInfo
from karl.pipeline.formatters import Formatter, get_formatter
from karl.pipeline.formatting import format_message
from karl.pipeline.levels import Level
from karl.pipeline.scheduler import DeferredScheduler

_log = get_logger("karl.logger")


def _level_method(level: Level) -> Callable[..., None]:
    def log_at_level(self: "Logger", *args: Any) -> None:
        self._log(level, args, log_at_level)

    name = level.value.lower()
    log_at_level.__name__ = name
    log_at_level.__qualname__ = f"Logger.{name}"
    log_at_level.__doc__ = (
        f"Log *args* at level {level.value}.\n\n"
        "The first argument is usually a printf-style template; see\n"
        ":func:`karl.pipeline.formatting.format_message`."
    )
    return log_at_level


class Logger:
    """Structured logger writing one line per call to standard output.

    Parameters
    ----------
    options:
        Initial :class:`LoggerOptions`.  Defaults to :data:`DEFAULT_OPTIONS`.
    stream:
        Output stream.  When omitted, ``sys.stdout`` is looked up at
        write time so stream replacement (e.g. by test harnesses) is
        honoured.
    scheduler:
        Continuation scheduler.  Defaults to a new
        :class:`DeferredScheduler`.
    resolver:
        Call-site resolver.  Defaults to a new :class:`CallSiteResolver`.
    process:
        Process identity stamped on every event.  Defaults to
        :data:`~karl.pipeline.event.PROCESS`.
    """

    def __init__(
        self,
        options: LoggerOptions | None = None,
        *,
        stream: IO[str] | None = None,
        scheduler: DeferredScheduler | None = None,
        resolver: CallSiteResolver | None = None,
        process: ProcessInfo | None = None,
    ) -> None:
        self._options = options or DEFAULT_OPTIONS
        self._formatter = get_formatter(self._options)
        self._stream = stream
        self._scheduler = scheduler or DeferredScheduler()
        self._resolver = resolver or CallSiteResolver()
        self._process = process or PROCESS

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def options(self) -> LoggerOptions:
        return self._options

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def set_options(
        self,
        options: LoggerOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> LoggerOptions:
        """Replace the active options wholesale.

        Keys not given fall back to their defaults, not to the currently
        active values.  Calls already made keep the options they captured.

        Raises:
            InvalidOptionError: an option has an unusable value; the
                active options are left unchanged.
        """
        if isinstance(options, LoggerOptions):
            if overrides:
                raise TypeError("pass either a LoggerOptions instance or option keywords, not both")
            new_options = options
        else:
            try:
                new_options = LoggerOptions.from_mapping(options, **overrides)
            except ConfigError as exc:
                _log.warning("options_rejected", code=exc.code, **exc.detail)
                raise
        self._formatter = get_formatter(new_options)
        self._options = new_options
        return new_options

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    trace = _level_method(Level.TRACE)
    debug = _level_method(Level.DEBUG)
    info = _level_method(Level.INFO)
    warn = _level_method(Level.WARN)
    error = _level_method(Level.ERROR)
    fatal = _level_method(Level.FATAL)

    # stdlib-style aliases
    warning = warn
    critical = fatal

    def log(self, level: Level | str | int, *args: Any) -> None:
        """Log *args* at *level* (a :class:`Level`, a name or a stdlib number)."""
        self._log(Level.coerce(level), args, Logger.log)

    def flush(self) -> None:
        self.stream.flush()

    def _log(
        self,
        level: Level,
        args: tuple[Any, ...],
        boundary: Callable[..., Any],
    ) -> None:
        options = self._options
        formatter = self._formatter
        if options.include_location_information:
            call_site = self._resolver.resolve(boundary)
        else:
            call_site = EMPTY_CALL_SITE
        timestamp = datetime.now(timezone.utc)
        self._scheduler.schedule(
            self._emit, level, timestamp, call_site, options, formatter, args
        )

    def _emit(
        self,
        level: Level,
        timestamp: datetime,
        call_site: CallSite,
        options: LoggerOptions,
        formatter: Formatter,
        args: tuple[Any, ...],
    ) -> None:
        event = LogEvent.build(
            timestamp=timestamp,
            level=level,
            message=format_message(*args),
            call_site=call_site,
            process=self._process,
        )
        record = event.to_record()
        if options.enrich is not None:
            options.enrich(record)
        line = formatter(record)
        if options.colorize:
            line = colorize_level(line, level)
        self.stream.write(line + "\n")


__all__ = ["Logger"]
