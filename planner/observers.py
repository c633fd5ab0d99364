"""Operation event hooks for the planner service."""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from .errors import PlannerError


class OperationObserver(Protocol):
    """Receives one ``started`` and then one ``succeeded`` or ``failed`` call per operation."""

    def started(self, operation: str, **context: Any) -> None:
        ...

    def succeeded(self, operation: str, **context: Any) -> None:
        ...

    def failed(self, operation: str, error: PlannerError, **context: Any) -> None:
        ...


class LoggingObserver:
    """Default observer writing one structured log record per event."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger("planner.operations")

    def started(self, operation: str, **context: Any) -> None:
        self._log.info("%s received", operation, extra={"operation": operation, "context": context})

    def succeeded(self, operation: str, **context: Any) -> None:
        self._log.info("%s succeeded", operation, extra={"operation": operation, "context": context})

    def failed(self, operation: str, error: PlannerError, **context: Any) -> None:
        self._log.warning(
            "%s failed with %s: %s",
            operation,
            error.code,
            error.message,
            extra={"operation": operation, "code": error.code, "service": error.service, "context": context},
        )


__all__ = ["OperationObserver", "LoggingObserver"]
