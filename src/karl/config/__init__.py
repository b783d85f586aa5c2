"""Config – logger options and their loaders."""

from karl.config.loaders import EnvOptionsLoader, OptionsLoader
from karl.config.options import ALIASES, DEFAULT_OPTIONS, LoggerOptions

__all__ = [
    "ALIASES",
    "DEFAULT_OPTIONS",
    "EnvOptionsLoader",
    "LoggerOptions",
    "OptionsLoader",
]
