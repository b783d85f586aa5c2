"""Deferred, FIFO continuation scheduling.

Logging calls capture what must be captured synchronously and hand the
rest of their work to a :class:`DeferredScheduler`.  Inside a running
asyncio event loop the work is queued with ``loop.call_soon``: it runs
after the current synchronous code yields, before any timer, in the
order it was scheduled.  Outside an event loop there is no later turn
to defer to, and the work runs immediately.

Either way the scheduling caller never sees an error raised by the
work.  Deferred work fails into the loop's exception handler; immediate
work fails into ``sys.excepthook``.
"""
from __future__ import annotations

import asyncio
import sys
import threading
from typing import Any, Callable

_reporting = threading.local()


class DeferredScheduler:
    """Run callables on the next turn of the calling thread's event loop."""

    def __init__(self) -> None:
        self._deferred = 0
        self._immediate = 0

    def schedule(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule ``fn(*args)``.

        Calls scheduled from the same thread always run in scheduling
        order.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running event loop: run synchronously
            self._immediate += 1
            self._run_now(fn, args)
            return
        self._deferred += 1
        loop.call_soon(fn, *args)

    def _run_now(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            fn(*args)
        except Exception:
            # a failure while an earlier one is being reported goes to
            # the hook that is already running
            if getattr(_reporting, "active", False):
                raise
            _reporting.active = True
            try:
                sys.excepthook(*sys.exc_info())
            finally:
                _reporting.active = False

    @property
    def stats(self) -> dict[str, int]:
        """How many callables were deferred vs. run immediately."""
        return {"deferred": self._deferred, "immediate": self._immediate}


__all__ = ["DeferredScheduler"]
