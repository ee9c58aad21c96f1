"""Incrementally growing list provider with background item fetches."""

from dynlist.core.provider import ListDataProvider
from dynlist.core.provider_config import ProviderConfig
from dynlist.core.snapshot import ListSnapshot, RowKey
from dynlist.domain.executor import FetchExecutor, FetchScheduler
from dynlist.domain.item import DataItem, FetchStatus, ListDataItem, data_item_factory

__version__ = "0.1.0"

__all__ = [
    "DataItem",
    "FetchExecutor",
    "FetchScheduler",
    "FetchStatus",
    "ListDataItem",
    "ListDataProvider",
    "ListSnapshot",
    "ProviderConfig",
    "RowKey",
    "data_item_factory",
]
