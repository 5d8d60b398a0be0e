"""
Internal diagnostics for the library itself.

Events are rendered by structlog and handed to the stdlib logger ``sevlog``,
so the host application decides (through stdlib logging) whether to see them.
They never go to a ``Logger``'s own sink.
"""

from __future__ import annotations

import logging

import structlog
from structlog.typing import EventDict, WrappedLogger

ROOT_LOGGER_NAME = "sevlog"


def add_component(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag the event with the emitting component name."""
    event_dict.setdefault("component", getattr(logger, "name", ROOT_LOGGER_NAME))
    return event_dict


_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    add_component,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "component", "event"]),
]


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a diagnostics logger for a sevlog component."""
    qualified = ROOT_LOGGER_NAME if not name else f"{ROOT_LOGGER_NAME}.{name}"
    return structlog.wrap_logger(
        logging.getLogger(qualified),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
