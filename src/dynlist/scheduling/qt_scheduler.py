"""QThreadPool scheduler delivering completions through queued Qt signals."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from dynlist.config import FETCH_POOL_MAX_WORKERS
from dynlist.domain.executor import (
    CompletedCallback,
    FailedCallback,
    FetchExecutor,
    FetchScheduler,
)

from ._errors import as_fetch_error

logger = logging.getLogger(__name__)


class _FetchSignals(QObject):
    completed = Signal(int, object)
    failed = Signal(int, object)


class _FetchWorker(QRunnable):
    """Background worker that fetches the payload of a single item."""

    def __init__(self, executor: FetchExecutor, ticket: int, index: int) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._executor = executor
        self._ticket = ticket
        self._index = index
        self.signals = _FetchSignals()

    def run(self) -> None:  # pragma: no cover - runs in background thread
        try:
            payload = self._executor.fetch(self._index)
        except Exception as exc:
            self.signals.failed.emit(self._ticket, as_fetch_error(self._index, exc))
            return
        self.signals.completed.emit(self._ticket, payload)


@dataclass
class _PendingFetch:
    index: int
    signals: _FetchSignals
    on_completed: CompletedCallback
    on_failed: FailedCallback


class _CompletionRelay(QObject):
    """Receiver living on the scheduler's thread.

    Worker signals are emitted from pool threads, so Qt queues every
    connection to this object and the slots run on its thread.
    """

    def __init__(self, scheduler: "QtFetchScheduler", parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._scheduler = scheduler

    @Slot(int, object)
    def on_completed(self, ticket: int, payload: Any) -> None:
        self._scheduler._deliver(ticket, payload, None)

    @Slot(int, object)
    def on_failed(self, ticket: int, error: object) -> None:
        self._scheduler._deliver(ticket, None, error)


class QtFetchScheduler(FetchScheduler):
    """Run fetches on a ``QThreadPool``; callbacks run on the creating thread.

    Requires a running Qt event loop on that thread for delivery.
    """

    def __init__(
        self,
        executor: FetchExecutor,
        *,
        max_threads: int = FETCH_POOL_MAX_WORKERS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(executor)
        self._pool = QThreadPool()
        self._pool.setMaxThreadCount(max(1, int(max_threads)))
        self._relay = _CompletionRelay(self, parent)
        self._tickets = itertools.count(1)
        self._pending: Dict[int, _PendingFetch] = {}

    def submit(self, index: int, on_completed: CompletedCallback, on_failed: FailedCallback) -> None:
        ticket = next(self._tickets)
        worker = _FetchWorker(self._executor, ticket, index)
        worker.signals.completed.connect(self._relay.on_completed)
        worker.signals.failed.connect(self._relay.on_failed)
        self._pending[ticket] = _PendingFetch(index, worker.signals, on_completed, on_failed)
        self._pool.start(worker)

    def pending_count(self) -> int:
        return len(self._pending)

    def _deliver(self, ticket: int, payload: Any, error: object) -> None:
        record = self._pending.pop(ticket, None)
        if record is None:
            return
        record.signals.deleteLater()
        if error is not None:
            logger.debug("Fetch for item %d failed: %s", record.index, error)
            record.on_failed(record.index, as_fetch_error(record.index, error))  # type: ignore[arg-type]
        else:
            record.on_completed(record.index, payload)

    def shutdown(self) -> None:
        self._pool.clear()
        self._pool.waitForDone()
        self._pending.clear()
