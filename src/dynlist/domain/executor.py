"""Contracts between list items and the data they fetch in the background."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol

from dynlist.errors import FetchFailedError

CompletedCallback = Callable[[int, Any], None]
FailedCallback = Callable[[int, FetchFailedError], None]


class FetchExecutor(Protocol):
    """Produce the payload for one item.

    ``fetch`` blocks and is always called off the observation context.  It may
    run concurrently for distinct indices and gives no ordering guarantee.
    Raising any exception reports a failure; executors never retry.
    """

    def fetch(self, index: int) -> Any: ...


class FetchScheduler(ABC):
    """Hand executor work to a background pool and marshal results back.

    Callbacks passed to :meth:`submit` are invoked on the scheduler's
    observation context, exactly once per submission, with either the payload
    or a :class:`FetchFailedError`.
    """

    def __init__(self, executor: FetchExecutor) -> None:
        self._executor = executor

    @property
    def executor(self) -> FetchExecutor:
        return self._executor

    @abstractmethod
    def submit(
        self,
        index: int,
        on_completed: CompletedCallback,
        on_failed: FailedCallback,
    ) -> None:
        """Schedule ``executor.fetch(index)`` on a background thread."""

    @abstractmethod
    def pending_count(self) -> int:
        """Return the number of submissions whose callback has not run yet."""

    def shutdown(self) -> None:
        """Release pool resources.  Pending callbacks may be dropped."""
