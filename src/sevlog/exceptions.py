"""
Unified exception hierarchy for sevlog.

Formatting has no error channel; only construction and sink delivery fail.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SevlogError(Exception):
    """Root of all sevlog errors.

    Carries a machine-readable ``code`` and a ``details`` dict next to the
    human-readable message so callers can branch without parsing text.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(SevlogError):
    """Raised when a logger, formatter or level cannot be built from its config."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        details = {"field": field} if field else None
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
        self.field = field


class SinkWriteError(SevlogError):
    """Raised by ``Logger.log`` when the sink rejects a write.

    The original exception is chained as ``__cause__``. The logger never
    retries, so ``written`` is whatever the sink reported before failing
    (usually 0).
    """

    def __init__(self, *, sink: Any, size: int, written: int = 0, reason: str = "") -> None:
        sink_name = type(sink).__name__
        message = f"Sink {sink_name} failed to write {size} bytes"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            code="SINK_WRITE_ERROR",
            details={"sink": sink_name, "size": size, "written": written},
        )
        self.size = size
        self.written = written
