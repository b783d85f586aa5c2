"""Call-site resolution.

Finds the source location of the code that invoked a logging entry
point.  The entry point identifies itself by passing its own function
(the *boundary*); the resolver walks outward from there and reports the
frame one level above it, however many internal helpers sit between the
boundary and the resolver.
"""
from __future__ import annotations

import sys
from types import CodeType, FrameType
from typing import Any, Callable


class CallSite:
    """Immutable source location of a logging call."""

    __slots__ = ("_file_name", "_line_number", "_function_name")

    def __init__(
        self,
        file_name: str | None,
        line_number: int | None,
        function_name: str | None,
    ) -> None:
        self._file_name = file_name
        self._line_number = line_number
        self._function_name = function_name

    def get_file_name(self) -> str | None:
        return self._file_name

    def get_line_number(self) -> int | None:
        return self._line_number

    def get_function_name(self) -> str | None:
        return self._function_name

    def __repr__(self) -> str:
        return (
            f"CallSite(file_name={self._file_name!r}, "
            f"line_number={self._line_number!r}, "
            f"function_name={self._function_name!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CallSite):
            return NotImplemented
        return (
            self._file_name == other._file_name
            and self._line_number == other._line_number
            and self._function_name == other._function_name
        )

    def __hash__(self) -> int:
        return hash((self._file_name, self._line_number, self._function_name))


#: Substituted when location capture is disabled or fails.
EMPTY_CALL_SITE = CallSite(None, None, None)


def _code_of(boundary: Callable[..., Any] | CodeType) -> CodeType:
    if isinstance(boundary, CodeType):
        return boundary
    func = getattr(boundary, "__func__", boundary)  # unwrap bound methods
    return func.__code__


class CallSiteResolver:
    """Resolve the caller of a boundary function.

    Example::

        resolver = CallSiteResolver()

        def info(*args):
            site = resolver.resolve(info)
            # site describes whoever called info()
    """

    def __init__(self, max_depth: int = 64) -> None:
        self._max_depth = max_depth

    def resolve(self, boundary: Callable[..., Any] | CodeType) -> CallSite:
        """Return the :class:`CallSite` of *boundary*'s caller.

        Degrades to :data:`EMPTY_CALL_SITE` when *boundary* is not on the
        stack or has no caller.
        """
        code = _code_of(boundary)
        frame: FrameType | None = sys._getframe(1)
        caller: FrameType | None = None
        try:
            depth = 0
            while frame is not None and depth < self._max_depth:
                if frame.f_code is code:
                    caller = frame.f_back
                    break
                frame = frame.f_back
                depth += 1
            if caller is None:
                return EMPTY_CALL_SITE
            caller_code = caller.f_code
            return CallSite(
                caller_code.co_filename,
                caller.f_lineno,
                getattr(caller_code, "co_qualname", caller_code.co_name),
            )
        finally:
            # no frame reference may outlive this call
            del frame
            del caller


__all__ = ["EMPTY_CALL_SITE", "CallSite", "CallSiteResolver"]
