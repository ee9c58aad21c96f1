"""Change-notification channels for providers and items.

A provider, its items and their observers all live on one observation
context, so a :class:`Signal` is a plain handler list called in connection
order on the emitting thread.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List

_logger = logging.getLogger(__name__)


class Signal:
    """Ordered handlers called synchronously by :meth:`emit`.

    Connecting a handler twice keeps a single entry.  A handler that raises is
    logged and the remaining handlers still run.  Handlers may connect or
    disconnect while an emission is in progress; the change applies from the
    next emission on.
    """

    def __init__(self) -> None:
        self._handlers: List[Callable[..., Any]] = []

    def connect(self, handler: Callable[..., Any]) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable[..., Any]) -> bool:
        """Remove *handler*; return ``False`` if it was not connected."""

        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def emit(self, *args: Any) -> None:
        for handler in tuple(self._handlers):
            try:
                handler(*args)
            except Exception:
                _logger.exception("Handler %r failed", handler)


class ObservableProperty:
    """Value holder emitting ``changed(new, old)`` when it actually changes."""

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        old_value = self._value
        if old_value == new_value:
            return
        self._value = new_value
        self.changed.emit(new_value, old_value)
