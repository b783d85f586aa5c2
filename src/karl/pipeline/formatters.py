"""Formatters – render a log record to a single output line.

Two renderings exist:

* ``json_formatter``: compact one-line JSON, keys in record order.
* ``text_formatter``: human-readable line, with or without location.

:func:`get_formatter` picks one from the two boolean options; there is
no third mode.
"""
from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable

import structlog

if TYPE_CHECKING:
    from karl.config.options import LoggerOptions

Formatter = Callable[[dict[str, Any]], str]

_json_renderer = structlog.processors.JSONRenderer(
    separators=(",", ":"),
    ensure_ascii=False,
)


def json_formatter(record: dict[str, Any]) -> str:
    """Serialise *record* as one line of JSON.

    Values that JSON cannot represent (e.g. objects attached by an
    ``enrich`` callback) are rendered with ``repr``.
    """
    return _json_renderer(None, "", record)


def text_formatter(record: dict[str, Any], include_location: bool = True) -> str:
    process = record["process"]
    if include_location:
        return "[%s] %s - %s - %s[%s@%s/%s(%s)]: %s" % (
            record["level"],
            record["timestamp"],
            record["hostName"],
            process["name"],
            record["functionName"],
            record["filePath"],
            record["fileName"],
            record["lineNumber"],
            record["message"],
        )
    return "[%s] %s - %s - %s: %s" % (
        record["level"],
        record["timestamp"],
        record["hostName"],
        process["name"],
        record["message"],
    )


def get_formatter(options: "LoggerOptions") -> Formatter:
    if options.json:
        return json_formatter
    return functools.partial(
        text_formatter,
        include_location=options.include_location_information,
    )


__all__ = ["Formatter", "get_formatter", "json_formatter", "text_formatter"]
