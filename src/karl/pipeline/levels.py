"""Severity levels."""
from __future__ import annotations

import enum
import logging


class Level(str, enum.Enum):
    """Ordered severities, TRACE lowest and FATAL highest.

    Members compare by rank, never alphabetically. No level is ever
    suppressed; the order only exists for mapping foreign level schemes.
    """

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def from_stdlib(cls, levelno: int) -> "Level":
        """Map a :mod:`logging` numeric level onto the closest severity."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE

    @classmethod
    def coerce(cls, value: "Level | str | int") -> "Level":
        """Accept a member, a case-insensitive name or a stdlib level number."""
        if isinstance(value, Level):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Not a log level: {value!r}")
        if isinstance(value, int):
            return cls.from_stdlib(value)
        name = str(value).upper()
        return cls(_NAME_ALIASES.get(name, name))


_RANKS: dict[Level, int] = {level: rank for rank, level in enumerate(Level)}

_NAME_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}

__all__ = ["Level"]
