"""Bootstrap for the interactive list viewer."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Mapping

from PySide6.QtWidgets import QApplication

from dynlist.core.provider import ListDataProvider
from dynlist.core.provider_config import ProviderConfig
from dynlist.domain.item import DataItem, data_item_factory
from dynlist.errors.handler import ErrorHandler
from dynlist.events.bus import EventBus
from dynlist.infrastructure.slow_data_store import SlowDataStore
from dynlist.scheduling.qt_scheduler import QtFetchScheduler

from .main_window import DynamicListWindow
from .models.dynamic_list_model import DynamicListModel

logger = logging.getLogger(__name__)


@dataclass
class Viewer:
    window: DynamicListWindow
    model: DynamicListModel
    provider: ListDataProvider[DataItem]
    scheduler: QtFetchScheduler
    event_bus: EventBus

    def close(self) -> None:
        self.model.dispose()
        self.provider.dispose()
        self.scheduler.shutdown()
        self.event_bus.shutdown()


def build_viewer(settings: Mapping[str, Any]) -> Viewer:
    """Wire store, scheduler, provider and model into a window.

    Must be called on the thread owning the ``QApplication``.
    """

    config = ProviderConfig.from_settings(settings.get("provider", {}))
    store = SlowDataStore.from_settings(settings.get("store", {}))
    event_bus = EventBus()
    scheduler = QtFetchScheduler(store)
    provider: ListDataProvider[DataItem] = ListDataProvider(
        data_item_factory(scheduler, retry_limit=config.retry_limit),
        config,
        event_bus=event_bus,
        error_handler=ErrorHandler(logger, event_bus),
    )
    model = DynamicListModel(provider)
    window = DynamicListWindow(model)
    return Viewer(window, model, provider, scheduler, event_bus)


def run_viewer(settings: Mapping[str, Any]) -> int:
    app = QApplication.instance() or QApplication(sys.argv[:1])
    viewer = build_viewer(settings)
    viewer.window.resize(420, 640)
    viewer.window.show()
    try:
        return app.exec()
    finally:
        viewer.close()
