"""Log event pipeline – capture, assembly, formatting and coloring."""
from karl.pipeline.callsite import EMPTY_CALL_SITE, CallSite, CallSiteResolver
from karl.pipeline.colors import LEVEL_COLORS, colorize, colorize_level, default_text_color
from karl.pipeline.event import ANONYMOUS_FUNCTION, PROCESS, LogEvent, ProcessInfo
from karl.pipeline.formatters import get_formatter, json_formatter, text_formatter
from karl.pipeline.formatting import format_message, inspect_value
from karl.pipeline.levels import Level
from karl.pipeline.scheduler import DeferredScheduler

__all__ = [
    "ANONYMOUS_FUNCTION",
    "CallSite",
    "CallSiteResolver",
    "DeferredScheduler",
    "EMPTY_CALL_SITE",
    "LEVEL_COLORS",
    "Level",
    "LogEvent",
    "PROCESS",
    "ProcessInfo",
    "colorize",
    "colorize_level",
    "default_text_color",
    "format_message",
    "get_formatter",
    "inspect_value",
    "json_formatter",
    "text_formatter",
]
