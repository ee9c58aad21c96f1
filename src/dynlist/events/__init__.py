from .bus import Event, EventBus, Subscription
from .list_events import (
    BatchAppendedEvent,
    CollectionResetEvent,
    ItemFetchedEvent,
    ItemFetchFailedEvent,
)

__all__ = [
    "BatchAppendedEvent",
    "CollectionResetEvent",
    "Event",
    "EventBus",
    "ItemFetchFailedEvent",
    "ItemFetchedEvent",
    "Subscription",
]
