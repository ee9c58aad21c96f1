from .executor import FetchExecutor, FetchScheduler
from .item import DataItem, FetchStatus, ListDataItem, data_item_factory

__all__ = [
    "DataItem",
    "FetchExecutor",
    "FetchScheduler",
    "FetchStatus",
    "ListDataItem",
    "data_item_factory",
]
