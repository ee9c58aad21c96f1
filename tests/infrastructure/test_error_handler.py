import logging
from unittest.mock import Mock

from dynlist.errors import FetchFailedError
from dynlist.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from dynlist.events.bus import EventBus


def test_handle_error_logs_and_publishes():
    logger = Mock(spec=logging.Logger)
    event_bus = Mock(spec=EventBus)
    handler = ErrorHandler(logger, event_bus)

    error = FetchFailedError(3, OSError("slow"))
    handler.handle(error, ErrorSeverity.WARNING, {"index": 3})

    logger.warning.assert_called_once()
    event = event_bus.publish.call_args[0][0]
    assert isinstance(event, ErrorOccurredEvent)
    assert event.error is error
    assert event.severity is ErrorSeverity.WARNING
    assert event.context == {"index": 3}


def test_severity_selects_logger_method():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))

    handler.handle(RuntimeError("store gone"), ErrorSeverity.CRITICAL)
    handler.handle(RuntimeError("slow"))

    fmt, name, error = logger.critical.call_args[0]
    assert (fmt, name, str(error)) == ("%s: %s", "RuntimeError", "store gone")
    logger.error.assert_called_once()
    logger.warning.assert_not_called()


def test_fetch_failed_message_includes_cause():
    error = FetchFailedError(7, TimeoutError("too slow"))
    assert str(error) == "fetch failed for item 7: too slow"
    assert error.index == 7
