"""Console interception.

Rebinds the module-level functions of the stdlib :mod:`logging` module
(``logging.info(...)``, ``logging.warning(...)``, ...) so that they
emit through a karl :class:`~karl.logger.Logger`, and restores the
original functions on demand.

The interceptor is a two-state toggle, NATIVE or REDIRECTED, decided
by comparing the target's current ``log`` function with the original
saved at construction.  Enabling while REDIRECTED and disabling while
NATIVE are no-ops, so functions are never wrapped twice.

==============  ===========
entry point     karl level
==============  ===========
``debug``       DEBUG
``info``        INFO
``warning``     WARN
``warn``        WARN
``error``       ERROR
``exception``   ERROR (with the active traceback)
``critical``    FATAL
``fatal``       FATAL
``log``         mapped from the numeric level
==============  ===========
"""
from __future__ import annotations

import logging
import sys
import traceback
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable

from karl._diagnostics import get_logger
from karl.pipeline.levels import Level

if TYPE_CHECKING:
    from karl.logger import Logger

_log = get_logger("karl.console")

ENTRY_POINTS: dict[str, Level] = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warning": Level.WARN,
    "warn": Level.WARN,
    "error": Level.ERROR,
    "exception": Level.ERROR,
    "critical": Level.FATAL,
    "fatal": Level.FATAL,
}


def _exception_args(exc_info: Any) -> tuple[str, ...]:
    """Render a stdlib ``exc_info`` argument as an extra message part."""
    if not exc_info:
        return ()
    if isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    elif not isinstance(exc_info, tuple):
        exc_info = sys.exc_info()
    if exc_info[0] is None:
        return ()
    return ("".join(traceback.format_exception(*exc_info)).rstrip("\n"),)


class ConsoleInterceptor:
    """Redirect a logging namespace's functions to a karl logger.

    Parameters
    ----------
    logger:
        Destination logger.
    target:
        Module or namespace whose functions are rebound.  Defaults to the
        stdlib :mod:`logging` module.  Its functions are saved once, here,
        and never re-read.
    """

    def __init__(self, logger: "Logger", target: ModuleType | Any = logging) -> None:
        self._logger = logger
        self._target = target
        self._originals: dict[str, Callable[..., Any]] = {
            name: getattr(target, name)
            for name in (*ENTRY_POINTS, "log")
            if hasattr(target, name)
        }
        if "log" not in self._originals:
            raise TypeError(f"{target!r} has no 'log' function to intercept")
        self._redirects: dict[str, Callable[..., Any]] = {
            name: self._make_redirect(name) for name in self._originals
        }

    @property
    def redirected(self) -> bool:
        return getattr(self._target, "log") is not self._originals["log"]

    @property
    def originals(self) -> dict[str, Callable[..., Any]]:
        return dict(self._originals)

    def redirect(self, enable: bool) -> bool:
        """Switch to REDIRECTED (*enable*) or NATIVE; returns the new state."""
        if enable:
            if not self.redirected:
                for name, redirect in self._redirects.items():
                    setattr(self._target, name, redirect)
                _log.debug("console_redirected", entry_points=sorted(self._redirects))
        else:
            if self.redirected:
                for name, original in self._originals.items():
                    setattr(self._target, name, original)
                _log.debug("console_restored", entry_points=sorted(self._originals))
        return self.redirected

    def enable(self) -> bool:
        return self.redirect(True)

    def disable(self) -> bool:
        return self.redirect(False)

    def _make_redirect(self, name: str) -> Callable[..., Any]:
        logger = self._logger

        if name == "log":
            def log(level: int, *args: Any, **kwargs: Any) -> None:
                extra = _exception_args(kwargs.get("exc_info"))
                logger._log(Level.coerce(level), (*args, *extra), log)

            return log

        level = ENTRY_POINTS[name]
        wants_traceback = name == "exception"

        def redirect(*args: Any, **kwargs: Any) -> None:
            exc_info = kwargs.get("exc_info", wants_traceback)
            logger._log(level, (*args, *_exception_args(exc_info)), redirect)

        redirect.__name__ = name
        redirect.__qualname__ = f"ConsoleInterceptor.{name}"
        return redirect


__all__ = ["ENTRY_POINTS", "ConsoleInterceptor"]
