import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
pytest.importorskip("PySide6", reason="PySide6 is required", exc_type=ImportError)

from PySide6.QtWidgets import QApplication

from dynlist.core.provider import ListDataProvider
from dynlist.core.provider_config import ProviderConfig
from dynlist.domain.item import data_item_factory
from dynlist.gui.main_window import DynamicListWindow
from dynlist.gui.models.dynamic_list_model import DynamicListModel


@pytest.fixture(scope="module")
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def test_reset_button_starts_new_generation(qapp, scheduler):
    provider = ListDataProvider(data_item_factory(scheduler), ProviderConfig(batch_size=20, prefetch_margin=3))
    model = DynamicListModel(provider)
    window = DynamicListWindow(model)
    first = provider.generation

    window.reset_button.click()

    assert provider.generation != first
    assert model.rowCount() == 20
    window.deleteLater()


def test_scrolling_reports_visible_rows(qapp, scheduler):
    provider = ListDataProvider(data_item_factory(scheduler), ProviderConfig(batch_size=20, prefetch_margin=3))
    model = DynamicListModel(provider)
    window = DynamicListWindow(model)
    window.resize(200, 120)
    window.show()
    qapp.processEvents()

    scrollbar = window.list_view.verticalScrollBar()
    scrollbar.setValue(scrollbar.maximum())
    qapp.processEvents()

    assert model.rowCount() > 20
    window.close()
    window.deleteLater()


def test_build_viewer_loads_first_batch(qtbot):
    from dynlist.gui.app import build_viewer

    settings = {
        "provider": {"batch_size": 5, "prefetch_margin": 1, "retry_limit": 0},
        "store": {"min_delay": 0.0, "max_delay": 0.0, "failure_rate": 0.0},
    }
    viewer = build_viewer(settings)
    try:
        assert viewer.model.rowCount() == 5
        qtbot.waitUntil(lambda: viewer.provider.snapshot().fetched_count() == 5, timeout=5000)
        assert viewer.window.reset_button.text() == "Reset"
    finally:
        viewer.close()
        viewer.window.deleteLater()
