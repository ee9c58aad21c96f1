import os
from collections import deque
from typing import Any, Deque, List, Tuple

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from dynlist.domain.executor import FetchScheduler
from dynlist.domain.item import FetchStatus, ListDataItem
from dynlist.errors import FetchFailedError


class RecordingExecutor:
    """Executor that returns ``index / 100`` and remembers every call."""

    def __init__(self) -> None:
        self.calls: List[int] = []

    def fetch(self, index: int) -> float:
        self.calls.append(index)
        return index / 100


class ManualScheduler(FetchScheduler):
    """Scheduler whose completions are delivered explicitly by the test.

    ``complete``/``fail`` play the role of the hand-off to the observation
    context, which makes interleavings with ``reset`` deterministic.
    """

    def __init__(self) -> None:
        super().__init__(RecordingExecutor())
        self.submitted: List[int] = []
        self._pending: Deque[Tuple[int, Any, Any]] = deque()

    def submit(self, index, on_completed, on_failed) -> None:
        self.submitted.append(index)
        self._pending.append((index, on_completed, on_failed))

    def pending_count(self) -> int:
        return len(self._pending)

    def pending_indices(self) -> List[int]:
        return [index for index, _, _ in self._pending]

    def _take(self, index: int):
        for entry in self._pending:
            if entry[0] == index:
                self._pending.remove(entry)
                return entry
        raise AssertionError(f"no pending fetch for index {index}")

    def complete(self, index: int, payload: Any = None) -> None:
        _, on_completed, _ = self._take(index)
        on_completed(index, index / 100 if payload is None else payload)

    def fail(self, index: int, cause: Exception | None = None) -> None:
        _, _, on_failed = self._take(index)
        on_failed(index, FetchFailedError(index, cause or RuntimeError("boom")))

    def complete_all(self) -> None:
        while self._pending:
            self.complete(self._pending[0][0])


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


class AmountItem(ListDataItem):
    """Minimal item that keeps its data in ``amount`` and is filled by hand."""

    def __init__(self, index: int) -> None:
        super().__init__(index)
        self.amount: Any = None
        self.requests = 0

    @property
    def fetch_status(self) -> FetchStatus:
        return FetchStatus.UNFETCHED if self.amount is None else FetchStatus.FETCHED

    @property
    def payload(self) -> Any:
        return self.amount

    def request_fetch(self) -> None:
        self.requests += 1

    def finish(self, amount: Any) -> None:
        self.amount = amount
        self.updated.emit(self)


@pytest.fixture
def amount_item_type() -> type:
    return AmountItem
