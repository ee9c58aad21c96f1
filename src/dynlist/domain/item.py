"""List items and their fetch state machine.

Every item starts ``UNFETCHED``.  ``request_fetch`` moves it to ``FETCHING``
and hands its index to a :class:`~dynlist.domain.executor.FetchScheduler`.
The scheduler reports back on the observation context, where the payload and
the ``FETCHED`` status are written together before ``updated`` fires, so an
observer never sees one without the other.
"""

from __future__ import annotations

import enum
import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from dynlist.config import DEFAULT_RETRY_LIMIT
from dynlist.core.signal import Signal
from dynlist.domain.executor import FetchScheduler
from dynlist.errors import FetchFailedError

logger = logging.getLogger(__name__)


class FetchStatus(enum.Enum):
    UNFETCHED = "unfetched"
    FETCHING = "fetching"
    FETCHED = "fetched"


class ListDataItem(ABC):
    """Capabilities the provider relies on.

    ``updated`` emits ``(item)`` once the item's data has arrived.
    ``fetch_failed`` emits ``(item, FetchFailedError)`` when a request gave up.
    ``payload`` must be set whenever ``fetch_status`` is ``FETCHED`` and be
    ``None`` otherwise.
    """

    def __init__(self, index: int) -> None:
        if index < 0:
            raise ValueError(f"item index must be non-negative, got {index}")
        self._index = index
        self.updated = Signal()
        self.fetch_failed = Signal()

    @property
    def index(self) -> int:
        return self._index

    @property
    def label(self) -> str:
        return f"Line {self._index}"

    @property
    @abstractmethod
    def fetch_status(self) -> FetchStatus: ...

    @property
    @abstractmethod
    def payload(self) -> Optional[Any]: ...

    @property
    def is_fetched(self) -> bool:
        return self.fetch_status is FetchStatus.FETCHED

    @abstractmethod
    def request_fetch(self) -> None:
        """Start fetching the item's data.  Must be a no-op unless unfetched."""

    def detach(self) -> None:
        """Called once the owning provider stops listening to this item."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self._index}, status={self.fetch_status.value})"


class DataItem(ListDataItem):
    """Item whose payload is produced by a background executor."""

    def __init__(
        self,
        index: int,
        scheduler: FetchScheduler,
        *,
        retry_limit: int = DEFAULT_RETRY_LIMIT,
    ) -> None:
        super().__init__(index)
        self._scheduler = scheduler
        self._retry_limit = max(0, int(retry_limit))
        self._status = FetchStatus.UNFETCHED
        self._payload: Optional[Any] = None
        self._attempts = 0
        self._executor_calls = 0

    @property
    def fetch_status(self) -> FetchStatus:
        return self._status

    @property
    def payload(self) -> Optional[Any]:
        return self._payload

    @property
    def attempts(self) -> int:
        """Executor calls made for the current (or last) request."""
        return self._attempts

    @property
    def executor_calls(self) -> int:
        """Executor calls made over the item's whole lifetime."""
        return self._executor_calls

    def request_fetch(self) -> None:
        if self._status is not FetchStatus.UNFETCHED:
            return
        self._status = FetchStatus.FETCHING
        self._attempts = 0
        self._submit()

    def detach(self) -> None:
        # A request already in flight still completes, but is not retried.
        self._retry_limit = 0

    def _submit(self) -> None:
        self._attempts += 1
        self._executor_calls += 1
        self._scheduler.submit(self._index, self._on_completed, self._on_failed)

    def _on_completed(self, index: int, payload: Any) -> None:
        if self._status is not FetchStatus.FETCHING:
            logger.debug("Ignoring completion for item %d in state %s", index, self._status.value)
            return
        if payload is None:
            self._on_failed(index, FetchFailedError(index, ValueError("executor returned no payload")))
            return
        self._payload = payload
        self._status = FetchStatus.FETCHED
        self.updated.emit(self)

    def _on_failed(self, index: int, error: FetchFailedError) -> None:
        if self._status is not FetchStatus.FETCHING:
            return
        if self._attempts <= self._retry_limit:
            logger.debug("Retrying item %d after attempt %d: %s", index, self._attempts, error)
            self._submit()
            return
        self._status = FetchStatus.UNFETCHED
        self.fetch_failed.emit(self, error)


def data_item_factory(
    scheduler: FetchScheduler,
    *,
    retry_limit: int = DEFAULT_RETRY_LIMIT,
) -> Callable[[int], DataItem]:
    """Return ``index -> DataItem`` bound to *scheduler*."""

    return functools.partial(DataItem, scheduler=scheduler, retry_limit=retry_limit)
