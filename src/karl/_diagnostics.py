"""Internal diagnostics logger.

karl writes its own events to stdout, so its housekeeping messages must
go elsewhere: they are routed through the stdlib ``karl`` logger and
obey whatever ``logging`` configuration the host application has.
"""
from __future__ import annotations

import logging
from typing import Any

import structlog

_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def get_logger(name: str = "karl", **initial_values: Any) -> Any:
    """Return a bound structlog logger over the stdlib logger *name*.

    The logger is wrapped explicitly rather than fetched through
    ``structlog.get_logger`` so the host's global structlog configuration
    is neither required nor modified.
    """
    logger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


logging.getLogger("karl").addHandler(logging.NullHandler())

__all__ = ["get_logger"]
