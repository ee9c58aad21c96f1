"""Generic data provider for incrementally growing lists.

The provider owns the ordered items of one *generation*.  A consumer reports
the row it has reached through :meth:`ListDataProvider.fetch_more_items_if_needed`
and the provider appends whole batches once that row is within
``prefetch_margin`` of the end.  Each appended item immediately requests its
own data.

All methods and signals belong to a single observation context (the GUI
thread, or whichever thread drains the fetch scheduler).  Nothing here takes
a lock.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from dynlist.core.provider_config import ProviderConfig
from dynlist.core.signal import ObservableProperty, Signal
from dynlist.core.snapshot import ListSnapshot
from dynlist.domain.item import ListDataItem
from dynlist.errors import FetchFailedError
from dynlist.errors.handler import ErrorHandler, ErrorSeverity
from dynlist.events.bus import Event, EventBus
from dynlist.events.list_events import (
    BatchAppendedEvent,
    CollectionResetEvent,
    ItemFetchedEvent,
    ItemFetchFailedEvent,
)

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=ListDataItem)


class ListDataProvider(Generic[ItemT]):
    """Own the items of the current generation and grow them on demand.

    Signals (all emitted on the observation context):

    ``collection_changed(snapshot)``
        after every mutation, reset or append.
    ``collection_reset(generation)``
        right after the items were cleared, before the first batch.
    ``items_appended(generation, start, end)``
        after rows ``[start, end)`` were appended.
    ``item_updated(generation, item)``
        when an item of the current generation received its data.
    ``item_fetch_failed(generation, item, error)``
        when an item of the current generation gave up fetching.
    """

    def __init__(
        self,
        item_factory: Callable[[int], ItemT],
        config: Optional[ProviderConfig] = None,
        *,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self._item_factory = item_factory
        self._config = config or ProviderConfig()
        self._event_bus = event_bus
        self._error_handler = error_handler

        self._items: List[ItemT] = []
        self._generation: Optional[uuid.UUID] = None
        self._connections: List[Tuple[Signal, Callable]] = []

        self.collection_changed = Signal()
        self.collection_reset = Signal()
        self.items_appended = Signal()
        self.item_updated = Signal()
        self.item_fetch_failed = Signal()
        self.count = ObservableProperty(0)

        self.reset()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def batch_size(self) -> int:
        return self._config.batch_size

    @property
    def prefetch_margin(self) -> int:
        return self._config.prefetch_margin

    @property
    def generation(self) -> uuid.UUID:
        return self._generation

    @property
    def items(self) -> Tuple[ItemT, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def snapshot(self) -> ListSnapshot[ItemT]:
        return ListSnapshot(items=tuple(self._items), generation=self._generation)

    def item_at(self, row: int) -> Optional[ItemT]:
        if 0 <= row < len(self._items):
            return self._items[row]
        return None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Drop every item, start a new generation and load the first batch.

        Fetches still in flight for the old items are not cancelled.  They
        complete into the detached items, are no longer forwarded and are
        not retried on failure.
        """

        previous = self._generation
        self._disconnect_items()
        self._items = []
        self._generation = uuid.uuid4()
        generation = self._generation
        logger.debug("List reset, generation %s", generation)

        self.count.value = 0
        self.collection_reset.emit(generation)
        self._publish(CollectionResetEvent(generation=generation, previous_generation=previous))
        self.collection_changed.emit(self.snapshot())

        # An observer may already have grown the new generation.
        if generation == self._generation and not self._items:
            self._append_through(-1)

    def fetch_more_items_if_needed(self, current_index: int) -> None:
        """Extend the list if *current_index* is close to its end."""

        if current_index < 0:
            return
        existing = self.item_at(current_index)
        if existing is not None:
            # Re-arms items whose previous request failed; no-op otherwise.
            existing.request_fetch()
        if current_index < len(self._items) - self._config.prefetch_margin:
            return
        self._append_through(current_index)

    def dispose(self) -> None:
        """Stop listening to the current items and cancel their retries."""

        self._disconnect_items()

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------
    def _append_through(self, current_index: int) -> None:
        start = len(self._items)
        end = max(start + self._config.batch_size, current_index + 1)
        generation = self._generation

        new_items = [self._item_factory(index) for index in range(start, end)]
        for expected, item in zip(range(start, end), new_items):
            if item.index != expected:
                raise ValueError(f"item factory returned index {item.index} for row {expected}")
            self._connect_item(item, generation)
        self._items.extend(new_items)
        logger.debug("Appended rows [%d, %d) to generation %s", start, end, generation)

        self.count.value = len(self._items)
        self.items_appended.emit(generation, start, end)
        self._publish(BatchAppendedEvent(generation=generation, start=start, end=end))
        self.collection_changed.emit(self.snapshot())

        for item in new_items:
            if generation != self._generation:
                # A handler reset the list while we were notifying.
                break
            item.request_fetch()

    # ------------------------------------------------------------------
    # Item notifications
    # ------------------------------------------------------------------
    def _connect_item(self, item: ItemT, generation: uuid.UUID) -> None:
        def _on_updated(updated: ItemT) -> None:
            self._on_item_updated(generation, updated)

        def _on_failed(failed: ItemT, error: FetchFailedError) -> None:
            self._on_item_failed(generation, failed, error)

        item.updated.connect(_on_updated)
        item.fetch_failed.connect(_on_failed)
        self._connections.append((item.updated, _on_updated))
        self._connections.append((item.fetch_failed, _on_failed))

    def _disconnect_items(self) -> None:
        for signal, handler in self._connections:
            signal.disconnect(handler)
        self._connections.clear()
        for item in self._items:
            item.detach()

    def _on_item_updated(self, generation: uuid.UUID, item: ItemT) -> None:
        if generation != self._generation:
            logger.debug("Discarding stale update for item %d of generation %s", item.index, generation)
            return
        self.item_updated.emit(generation, item)
        self._publish(ItemFetchedEvent(generation=generation, index=item.index, payload=item.payload))

    def _on_item_failed(self, generation: uuid.UUID, item: ItemT, error: FetchFailedError) -> None:
        if generation != self._generation:
            logger.debug("Discarding stale failure for item %d of generation %s", item.index, generation)
            return
        context = {"index": item.index, "generation": str(generation)}
        if self._error_handler is not None:
            self._error_handler.handle(error, ErrorSeverity.WARNING, context)
        else:
            logger.warning("Fetch failed for item %d: %s", item.index, error)
        self.item_fetch_failed.emit(generation, item, error)
        self._publish(ItemFetchFailedEvent(generation=generation, index=item.index, reason=str(error)))

    def _publish(self, event: Event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)
