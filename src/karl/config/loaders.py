"""Config – environment based option loading.

``EnvOptionsLoader().load(LoggerOptions)`` reads ``KARL_JSON``,
``KARL_COLORIZE``, ``KARL_INCLUDE_LOCATION_INFORMATION`` and
``KARL_REDIRECT_CONSOLE``.  Unset variables keep the field default.
Fields that cannot come from the environment (``enrich``) are skipped.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Mapping
from typing import Any, TypeVar

from karl.config.options import LoggerOptions
from karl.errors import ConfigError, KarlError, MissingRequiredOptionError

T = TypeVar("T", bound=LoggerOptions)

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


class OptionsLoader(abc.ABC):
    """Port: load logger options from an external source."""

    @abc.abstractmethod
    def load(self, options_class: type[T]) -> T: ...


class EnvOptionsLoader(OptionsLoader):
    """Load options from OS environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, options_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(options_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(options_class):
            if not self._is_bool(field.type):
                continue
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING
                ):
                    raise MissingRequiredOptionError(env_key)
                continue

            kwargs[field.name] = self._coerce(env_key, raw)

        try:
            return options_class(**kwargs)
        except KarlError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load options: {exc}", cause=exc) from exc

    @staticmethod
    def _is_bool(type_hint: Any) -> bool:
        return type_hint is bool or type_hint == "bool"

    def _coerce(self, env_key: str, value: str) -> bool:
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ConfigError(
            f"Environment variable '{env_key}' is not a boolean: {value!r}",
            detail={"variable": env_key},
        )


__all__ = ["EnvOptionsLoader", "OptionsLoader"]
