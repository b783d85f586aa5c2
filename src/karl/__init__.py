"""
karl – very fast and simplistic logger that logs to standard output.

Usage::

    import karl

    karl.info("Created queue %d.", 3)
    karl.set_options(json=False, colorize=True)
    karl.warn("low disk")

Importing karl redirects the stdlib ``logging`` module functions through
karl (see :mod:`karl.console`) and installs the fatal-error guard (see
:mod:`karl.guard`).  Pass ``redirect_console=False`` to
:func:`set_options` to restore the stdlib functions.

The guard installed at import covers exceptions escaping the main
thread (``sys.excepthook``) and worker threads
(``threading.excepthook``).  Exceptions from asyncio tasks and
callbacks reach it only once the loop is registered::

    async def main():
        karl.install_loop_guard()
        ...
"""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from karl.config import DEFAULT_OPTIONS, EnvOptionsLoader, LoggerOptions
from karl.console import ConsoleInterceptor
from karl.errors import ConfigError, InvalidOptionError, KarlError
from karl.guard import FatalErrorGuard
from karl.logger import Logger
from karl.pipeline.levels import Level

__version__ = "1.1.0"

_logger = Logger(DEFAULT_OPTIONS)
_console = ConsoleInterceptor(_logger)
_guard = FatalErrorGuard(_logger)

trace = _logger.trace
debug = _logger.debug
info = _logger.info
warn = _logger.warn
warning = _logger.warning
error = _logger.error
fatal = _logger.fatal
critical = _logger.critical
log = _logger.log


def get_logger() -> Logger:
    """Return the process-wide logger behind the module-level functions."""
    return _logger


def get_options() -> LoggerOptions:
    return _logger.options


def set_options(
    options: LoggerOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> LoggerOptions:
    """Change the way karl behaves.

    Options not passed are reset to their defaults; they do not keep
    the values of a previous call.

    Args:
        options: A :class:`LoggerOptions` or a mapping; camelCase keys
            such as ``includeLocationInformation`` are accepted.
        **overrides: Options as keywords (``include_location_information``,
            ``colorize``, ``redirect_console``, ``json``, ``enrich``).

    Raises:
        InvalidOptionError: an option has an unusable value.
    """
    new_options = _logger.set_options(options, **overrides)
    _console.redirect(new_options.redirect_console)
    return new_options


def configure_from_env(environ: Mapping[str, str] | None = None) -> LoggerOptions:
    """Apply options read from ``KARL_*`` environment variables."""
    return set_options(EnvOptionsLoader(environ).load(LoggerOptions))


def install_loop_guard(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Extend the fatal-error guard to *loop* (default: the running loop)."""
    _guard.install_loop(loop)


_console.redirect(DEFAULT_OPTIONS.redirect_console)
_guard.install()

__all__ = [
    "ConfigError",
    "InvalidOptionError",
    "KarlError",
    "Level",
    "Logger",
    "LoggerOptions",
    "__version__",
    "configure_from_env",
    "critical",
    "debug",
    "error",
    "fatal",
    "get_logger",
    "get_options",
    "info",
    "install_loop_guard",
    "log",
    "set_options",
    "trace",
    "warn",
    "warning",
]
