"""Thread-pool scheduler that hands completions back through one queue.

Workers never touch items.  They push a completion record onto a single
``queue.Queue``; the owner of the observation context applies the records by
calling :meth:`QueuedFetchScheduler.drain`.  Suitable for headless use where
no Qt event loop runs.
"""

from __future__ import annotations

import logging
import queue
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional

from dynlist.config import FETCH_POOL_MAX_WORKERS
from dynlist.domain.executor import (
    CompletedCallback,
    FailedCallback,
    FetchExecutor,
    FetchScheduler,
)
from dynlist.errors import FetchFailedError

from ._errors import as_fetch_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Completion:
    index: int
    payload: Any
    error: Optional[FetchFailedError]
    on_completed: CompletedCallback
    on_failed: FailedCallback


class QueuedFetchScheduler(FetchScheduler):
    """Run fetches on a ``ThreadPoolExecutor``; apply results in :meth:`drain`."""

    def __init__(self, executor: FetchExecutor, *, max_workers: int = FETCH_POOL_MAX_WORKERS) -> None:
        super().__init__(executor)
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dynlist-fetch")
        self._completions: "queue.Queue[_Completion]" = queue.Queue()
        # Only read and written on the observation context.
        self._pending = 0

    def submit(self, index: int, on_completed: CompletedCallback, on_failed: FailedCallback) -> None:
        self._pending += 1
        self._pool.submit(self._run, index, on_completed, on_failed)

    def pending_count(self) -> int:
        return self._pending

    def _run(self, index: int, on_completed: CompletedCallback, on_failed: FailedCallback) -> None:
        try:
            payload = self._executor.fetch(index)
        except Exception as exc:
            self._completions.put(_Completion(index, None, as_fetch_error(index, exc), on_completed, on_failed))
            return
        self._completions.put(_Completion(index, payload, None, on_completed, on_failed))

    # ------------------------------------------------------------------
    # Observation-context side
    # ------------------------------------------------------------------
    def drain(self, *, block: bool = False, timeout: Optional[float] = None) -> int:
        """Apply every queued completion on the calling thread.

        With ``block=True`` the call waits up to *timeout* seconds for the
        first completion when nothing is queued yet.  Returns the number of
        completions applied.
        """

        applied = 0
        while True:
            try:
                if block and applied == 0 and self._pending:
                    completion = self._completions.get(timeout=timeout)
                else:
                    completion = self._completions.get_nowait()
            except queue.Empty:
                return applied
            self._apply(completion)
            applied += 1

    def wait_until_idle(self, timeout: float) -> bool:
        """Drain until no submission is pending.  Returns ``False`` on timeout."""

        deadline = time.monotonic() + timeout
        while self._pending:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            self.drain(block=True, timeout=remaining)
        return True

    def _apply(self, completion: _Completion) -> None:
        self._pending -= 1
        if completion.error is not None:
            logger.debug("Fetch for item %d failed: %s", completion.index, completion.error)
            completion.on_failed(completion.index, completion.error)
        else:
            completion.on_completed(completion.index, completion.payload)

    def shutdown(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)
