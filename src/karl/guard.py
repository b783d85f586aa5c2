"""Fatal-error guard.

Last line of defence for errors nobody caught.  The guard hooks the
process boundaries Python offers:

* ``sys.excepthook``: an exception escaped the main thread.  The
  interpreter is already shutting down; the guard only records it.
* ``threading.excepthook``: an exception escaped a worker thread.
* an asyncio loop's exception handler (see :meth:`install_loop`): a
  task or callback failed and nobody retrieved the exception.

Each occurrence is logged as a FATAL event whose message starts with
``UncaughtException:`` and carries the full traceback.  For threads and
event loops the guard then sends SIGINT to its own process on a later
scheduler turn, so shutdown goes through ``KeyboardInterrupt`` (or task
cancellation under :func:`asyncio.run`) instead of an abrupt exit.
"""
from __future__ import annotations

import asyncio
import os
import signal
import sys
import threading
import traceback
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable

from karl._diagnostics import get_logger
from karl.pipeline.scheduler import DeferredScheduler

if TYPE_CHECKING:
    from karl.logger import Logger

_log = get_logger("karl.guard")

UNCAUGHT_PREFIX = "UncaughtException:"


def interrupt_self() -> None:
    """Send SIGINT to the current process."""
    os.kill(os.getpid(), signal.SIGINT)


class FatalErrorGuard:
    """Log uncaught errors at FATAL level, then interrupt the process.

    Parameters
    ----------
    logger:
        Logger receiving the FATAL events.
    kill:
        Termination action, run after the FATAL line was written.
        Defaults to :func:`interrupt_self`.
    scheduler:
        Scheduler deferring *kill* behind the pending write.
    """

    def __init__(
        self,
        logger: "Logger",
        *,
        kill: Callable[[], None] = interrupt_self,
        scheduler: DeferredScheduler | None = None,
    ) -> None:
        self._logger = logger
        self._kill = kill
        self._scheduler = scheduler or DeferredScheduler()
        self._installed = False
        self._previous_excepthook: Callable[..., Any] | None = None
        self._previous_threading_excepthook: Callable[..., Any] | None = None

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        """Hook ``sys.excepthook`` and ``threading.excepthook`` (once)."""
        if self._installed:
            return
        self._previous_excepthook = sys.excepthook
        self._previous_threading_excepthook = threading.excepthook
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_excepthook
        self._installed = True
        _log.debug("fatal_guard_installed")

    def uninstall(self) -> None:
        """Restore the hooks that were active before :meth:`install`."""
        if not self._installed:
            return
        if sys.excepthook == self._excepthook:
            sys.excepthook = self._previous_excepthook or sys.__excepthook__
        if threading.excepthook == self._threading_excepthook:
            threading.excepthook = (
                self._previous_threading_excepthook or threading.__excepthook__
            )
        self._installed = False
        _log.debug("fatal_guard_uninstalled")

    def install_loop(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Handle unretrieved exceptions of *loop* (default: the running loop)."""
        loop = loop or asyncio.get_running_loop()
        loop.set_exception_handler(self._loop_exception_handler)

    # ------------------------------------------------------------------
    # Handling
    # ------------------------------------------------------------------

    def handle(
        self,
        exc_type: type[BaseException],
        exc: BaseException | None,
        tb: TracebackType | None,
        *,
        terminate: bool = True,
    ) -> bool:
        """Log *exc* as FATAL and optionally schedule termination.

        Never raises.  Returns ``False`` when the event could not be
        logged.
        """
        try:
            stack = "".join(traceback.format_exception(exc_type, exc, tb)).rstrip("\n")
            self._logger.fatal(UNCAUGHT_PREFIX + " %s", stack)
            if terminate:
                self._scheduler.schedule(self._terminate)
            else:
                self._scheduler.schedule(self._logger.flush)
        except Exception:  # noqa: BLE001
            _log.exception("fatal_guard_failed", error_type=exc_type.__name__)
            return False
        return True

    def _terminate(self) -> None:
        try:
            self._logger.flush()
        finally:
            self._kill()

    def _excepthook(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt) or not self.handle(
            exc_type, exc, tb, terminate=False
        ):
            previous = self._previous_excepthook or sys.__excepthook__
            previous(exc_type, exc, tb)

    def _threading_excepthook(self, args: threading.ExceptHookArgs) -> None:
        if args.exc_type is SystemExit:
            return
        if not self.handle(args.exc_type, args.exc_value, args.exc_traceback):
            previous = self._previous_threading_excepthook or threading.__excepthook__
            previous(args)

    def _loop_exception_handler(
        self,
        loop: asyncio.AbstractEventLoop,
        context: dict[str, Any],
    ) -> None:
        exc = context.get("exception")
        if exc is None or not self.handle(type(exc), exc, exc.__traceback__):
            loop.default_exception_handler(context)


__all__ = ["UNCAUGHT_PREFIX", "FatalErrorGuard", "interrupt_self"]
