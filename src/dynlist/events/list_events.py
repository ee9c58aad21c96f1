from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from .bus import Event


@dataclass(frozen=True, kw_only=True)
class CollectionResetEvent(Event):
    generation: uuid.UUID
    previous_generation: Optional[uuid.UUID] = None


@dataclass(frozen=True, kw_only=True)
class BatchAppendedEvent(Event):
    generation: uuid.UUID
    start: int = 0
    end: int = 0

    @property
    def count(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, kw_only=True)
class ItemFetchedEvent(Event):
    generation: uuid.UUID
    index: int = 0
    payload: Any = None


@dataclass(frozen=True, kw_only=True)
class ItemFetchFailedEvent(Event):
    generation: uuid.UUID
    index: int = 0
    reason: str = field(default="")
