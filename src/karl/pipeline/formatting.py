"""printf-style message formatting.

:func:`format_message` turns the variadic arguments of a logging call
into one string:

* When the first argument is a string it is treated as a template.
  Every placeholder consumes the next positional argument; ``%%``
  renders a literal percent sign.  A placeholder with no argument left
  to consume is kept verbatim.
* Arguments left over after the template are appended, separated by a
  single space.  Strings are appended as-is, any other value through
  :func:`inspect_value`.
* When the first argument is not a string, every argument is rendered
  that way and the results are joined with spaces.

Placeholders:

* ``%s %d %i %f`` without modifiers: string, number (``NaN`` when the
  value is not numeric), truncated integer, float.
* ``%j`` JSON, ``%o`` pretty-printed, ``%O`` :func:`inspect_value`,
  ``%c`` consumed and rendered as nothing.  Modifiers are ignored.
* Python conversions ``%r %a %x %X %e %E %g %G %u``, and ``%s %d %i %f``
  with flags, width or precision (``%-10s``, ``%5d``, ``%.2f``), are
  rendered by the ``%`` operator.  When the value does not fit the
  conversion, ``%s %d %i %f`` fall back to their plain rendering and the
  others to ``str(value)``.

Example::

    >>> format_message("Created queue %d.", 3)
    'Created queue 3.'
    >>> format_message("took %.2f s", 1.234)
    'took 1.23 s'
    >>> format_message("payload", {"a": 1})
    "payload {'a': 1}"
"""
from __future__ import annotations

import json
import math
import pprint
import re
from typing import Any, Callable

_PLACEHOLDER = re.compile(
    r"%%|%(?P<modifiers>[-+#0]*\d*(?:\.\d+)?)(?P<conversion>[sdifjoOcraxXeEgGu])"
)

def inspect_value(value: Any) -> str:
    """Generic structural representation of a value."""
    return repr(value)


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _format_number(number: int | float) -> str:
    if isinstance(number, int):
        return str(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _as_string(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _as_decimal(value: Any) -> str:
    return _format_number(_to_number(value))


def _as_integer(value: Any) -> str:
    number = _to_number(value)
    if isinstance(number, float) and not math.isfinite(number):
        return "NaN"
    return str(int(number))


def _as_float(value: Any) -> str:
    return _format_number(float(_to_number(value)))


def _as_json(value: Any) -> str:
    try:
        return json.dumps(value, default=repr)
    except ValueError:
        return "[Circular]"


def _as_pretty(value: Any) -> str:
    return pprint.pformat(value)


def _consume(value: Any) -> str:
    return ""


_CONVERTERS: dict[str, Callable[[Any], str]] = {
    "s": _as_string,
    "d": _as_decimal,
    "i": _as_integer,
    "f": _as_float,
    "j": _as_json,
    "o": _as_pretty,
    "O": inspect_value,
    "c": _consume,
}

_MODIFIERS_IGNORED = frozenset("joOc")


def _convert(modifiers: str, conversion: str, value: Any) -> str:
    plain = _CONVERTERS.get(conversion)
    if plain is not None and (not modifiers or conversion in _MODIFIERS_IGNORED):
        return plain(value)
    try:
        return f"%{modifiers}{conversion}" % (value,)
    except (TypeError, ValueError, OverflowError):
        return plain(value) if plain is not None else str(value)


def _render_leftover(value: Any) -> str:
    return value if isinstance(value, str) else inspect_value(value)


def format_message(*args: Any) -> str:
    """Expand a printf-style template with its arguments."""
    if not args:
        return ""
    template = args[0]
    if not isinstance(template, str):
        return " ".join(_render_leftover(arg) for arg in args)
    if len(args) == 1:
        return template

    values = args[1:]
    consumed = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal consumed
        token = match.group()
        if token == "%%":
            return "%"
        if consumed >= len(values):
            return token
        value = values[consumed]
        consumed += 1
        return _convert(match["modifiers"], match["conversion"], value)

    message = _PLACEHOLDER.sub(substitute, template)
    leftovers = values[consumed:]
    if leftovers:
        message = " ".join([message, *(_render_leftover(v) for v in leftovers)])
    return message


__all__ = ["format_message", "inspect_value"]
