import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dynlist.events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True, kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    """Single sink for recoverable errors: log at the given severity, then publish."""

    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[dict] = None,
    ) -> None:
        context = dict(context or {})
        log_method = getattr(self._logger, severity.value, self._logger.error)
        if context:
            log_method("%s: %s %s", error.__class__.__name__, error, context)
        else:
            log_method("%s: %s", error.__class__.__name__, error)

        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=context))
