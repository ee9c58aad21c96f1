"""Minimal window hosting a :class:`DynamicListModel`."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QModelIndex
from PySide6.QtWidgets import QListView, QPushButton, QVBoxLayout, QWidget

from .models.dynamic_list_model import DynamicListModel


class DynamicListWindow(QWidget):
    """List view plus a "Reset" button; reports the last visible row on scroll."""

    def __init__(self, model: DynamicListModel, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._model = model
        self.setWindowTitle("Dynamic list")

        self.list_view = QListView(self)
        self.list_view.setUniformItemSizes(True)
        self.list_view.setModel(model)
        self.reset_button = QPushButton("Reset", self)

        layout = QVBoxLayout(self)
        layout.addWidget(self.list_view)
        layout.addWidget(self.reset_button)

        self.reset_button.clicked.connect(model.reset)
        self.list_view.verticalScrollBar().valueChanged.connect(self._report_visible_rows)
        model.modelReset.connect(self.list_view.scrollToTop)

    def last_visible_row(self) -> int:
        viewport = self.list_view.viewport()
        index: QModelIndex = self.list_view.indexAt(viewport.rect().bottomLeft())
        if index.isValid():
            return index.row()
        return self._model.rowCount() - 1

    def _report_visible_rows(self, *_args) -> None:
        row = self.last_visible_row()
        if row >= 0:
            self._model.notify_row_visible(row)
