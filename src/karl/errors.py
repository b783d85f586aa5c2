"""Error hierarchy for karl.

Hierarchy::

    KarlError
    └── ConfigError
        ├── InvalidOptionError
        └── MissingRequiredOptionError

The logging pipeline itself never raises these; they surface only from
configuration entry points.
"""

from __future__ import annotations

from typing import Any


class KarlError(Exception):
    """Root of the karl error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug.
        detail: Structured context, e.g. the offending option.
        cause: Original exception that triggered this error.
    """

    default_code: str = "karl_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ConfigError(KarlError):
    """Raised when logger options are invalid or loading them failed."""
    default_code = "config_error"


class MissingRequiredOptionError(ConfigError):
    """A required option is absent."""
    default_code = "missing_required_option"

    def __init__(self, option_name: str) -> None:
        super().__init__(
            f"Required option '{option_name}' is missing",
            detail={"option": option_name},
        )
        self.option_name = option_name


class InvalidOptionError(ConfigError):
    """An option is present but its value is unusable."""
    default_code = "invalid_option"

    def __init__(self, option_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Option '{option_name}' has invalid value {value!r}: {reason}",
            detail={"option": option_name, "reason": reason},
        )
        self.option_name = option_name
        self.value = value
        self.reason = reason


__all__ = [
    "ConfigError",
    "InvalidOptionError",
    "KarlError",
    "MissingRequiredOptionError",
]
