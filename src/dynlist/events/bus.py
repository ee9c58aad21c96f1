"""In-process publish/subscribe bus for list lifecycle events."""

from __future__ import annotations

import logging
import threading
import uuid
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


@dataclass(frozen=True, kw_only=True)
class Event:
    """Base class for everything published on the bus."""

    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""

    event_type: Type[Event]
    handler: Callable[[Event], None]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Dispatch events by exact type.

    Synchronous handlers run on the publishing thread, in subscription order.
    Asynchronous handlers are submitted to a small thread pool.  A failing
    handler is logged and never prevents the remaining handlers from running.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_workers: int = 4) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._sync_handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)
        self._async_handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dynlist-bus")
        self._lock = threading.Lock()

    def subscribe(
        self,
        event_type: Type[Event],
        handler: Callable[[Event], None],
        async_: bool = False,
    ) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        with self._lock:
            store = self._async_handlers if async_ else self._sync_handlers
            store[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()
        with self._lock:
            for store in (self._sync_handlers, self._async_handlers):
                subs = store.get(subscription.event_type, [])
                if subscription in subs:
                    subs.remove(subscription)

    def publish(self, event: Event) -> None:
        event_type = type(event)
        with self._lock:
            sync_subs = list(self._sync_handlers[event_type])
            async_subs = list(self._async_handlers[event_type])

        for sub in sync_subs:
            if sub.active:
                self._safe_call(sub.handler, event)

        for sub in async_subs:
            if sub.active:
                self._executor.submit(self._safe_call, sub.handler, event)

    def _safe_call(self, handler: Callable[[Event], None], event: Event) -> None:
        try:
            handler(event)
        except Exception as exc:
            self._logger.error("Handler for %s failed: %s", type(event).__name__, exc)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
