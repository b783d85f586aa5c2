"""Config – LoggerOptions and the merge-against-defaults rule."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Callable, ClassVar

from karl._diagnostics import get_logger
from karl.errors import InvalidOptionError

_log = get_logger("karl.config")

#: camelCase option spellings accepted as aliases.
ALIASES: dict[str, str] = {
    "includeLocationInformation": "include_location_information",
    "redirectConsole": "redirect_console",
}


@dataclasses.dataclass(frozen=True)
class LoggerOptions:
    """Behaviour switches of a :class:`~karl.logger.Logger`.

    Attributes:
        include_location_information: Capture file, line and function of
            each call.  Disabling it is markedly faster.
        colorize: Color WARN yellow, ERROR/FATAL red and TRACE green.
        redirect_console: Route the stdlib ``logging`` module functions
            through karl.
        json: Render JSON lines; otherwise plain text.
        enrich: Called with every event record before rendering; may add
            fields in place.  Its return value is ignored.
    """

    _prefix: ClassVar[str] = "KARL"

    include_location_information: bool = True
    colorize: bool = False
    redirect_console: bool = True
    json: bool = True
    enrich: Callable[[dict[str, Any]], Any] | None = None

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if field.name == "enrich":
                if value is not None and not callable(value):
                    raise InvalidOptionError(field.name, value, "must be callable or None")
            elif not isinstance(value, bool):
                raise InvalidOptionError(field.name, value, "must be a bool")

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> "LoggerOptions":
        """Build options from *options* and *overrides*.

        Keys may be snake_case or the camelCase aliases.  Keys that are
        not given keep their **default** value, never the value of any
        previously active options.  Unknown keys are ignored.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        ignored: list[str] = []
        for key, value in {**(options or {}), **overrides}.items():
            name = ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                ignored.append(key)
        if ignored:
            _log.warning("unknown_options_ignored", keys=sorted(ignored))
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}


DEFAULT_OPTIONS = LoggerOptions()

__all__ = ["ALIASES", "DEFAULT_OPTIONS", "LoggerOptions"]
