"""Read-only view of the provider handed to consumers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Generic, Iterator, NamedTuple, Tuple, TypeVar

from dynlist.domain.item import ListDataItem

ItemT = TypeVar("ItemT", bound=ListDataItem)


class RowKey(NamedTuple):
    """Identity of one rendered row.

    Keying per-row state by ``(generation, index)`` makes a reset a full
    identity change even when row positions coincide.
    """

    generation: uuid.UUID
    index: int


@dataclass(frozen=True)
class ListSnapshot(Generic[ItemT]):
    items: Tuple[ItemT, ...]
    generation: uuid.UUID

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ItemT]:
        return iter(self.items)

    def __getitem__(self, row: int) -> ItemT:
        return self.items[row]

    def row_key(self, row: int) -> RowKey:
        if not 0 <= row < len(self.items):
            raise IndexError(f"row {row} outside snapshot of {len(self.items)} items")
        return RowKey(self.generation, self.items[row].index)

    def fetched_count(self) -> int:
        return sum(1 for item in self.items if item.is_fetched)
