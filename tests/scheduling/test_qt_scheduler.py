"""QtFetchScheduler delivers completions on the GUI thread."""

import threading

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required", exc_type=ImportError)
pytest.importorskip("pytestqt")

from dynlist.core.provider import ListDataProvider
from dynlist.core.provider_config import ProviderConfig
from dynlist.domain.item import FetchStatus, data_item_factory
from dynlist.errors import FetchFailedError
from dynlist.scheduling.qt_scheduler import QtFetchScheduler


class Executor:
    def __init__(self, fail_on=()):
        self.threads = set()
        self._fail_on = set(fail_on)
        self._lock = threading.Lock()

    def fetch(self, index):
        with self._lock:
            self.threads.add(threading.get_ident())
        if index in self._fail_on:
            raise RuntimeError("unavailable")
        return index + 0.5


def test_completion_delivered_on_gui_thread(qtbot):
    executor = Executor()
    scheduler = QtFetchScheduler(executor, max_threads=4)
    results = []
    gui_thread = threading.get_ident()

    scheduler.submit(4, lambda index, payload: results.append((index, payload, threading.get_ident())), None)
    qtbot.waitUntil(lambda: scheduler.pending_count() == 0, timeout=5000)

    assert results == [(4, 4.5, gui_thread)]
    assert gui_thread not in executor.threads
    scheduler.shutdown()


def test_failure_delivered_as_fetch_failed(qtbot):
    scheduler = QtFetchScheduler(Executor(fail_on={2}))
    errors = []

    scheduler.submit(2, lambda *args: None, lambda index, error: errors.append((index, error)))
    qtbot.waitUntil(lambda: len(errors) == 1, timeout=5000)

    index, error = errors[0]
    assert index == 2
    assert isinstance(error, FetchFailedError)
    assert isinstance(error.cause, RuntimeError)
    scheduler.shutdown()


def test_provider_batches_fetch_through_thread_pool(qtbot):
    scheduler = QtFetchScheduler(Executor())
    provider = ListDataProvider(data_item_factory(scheduler), ProviderConfig(batch_size=20, prefetch_margin=3))

    provider.fetch_more_items_if_needed(55)
    qtbot.waitUntil(lambda: all(item.is_fetched for item in provider.items), timeout=10000)

    assert len(provider) == 56
    assert provider.items[55].payload == 55.5
    assert all(item.fetch_status is FetchStatus.FETCHED for item in provider.items)
    scheduler.shutdown()
