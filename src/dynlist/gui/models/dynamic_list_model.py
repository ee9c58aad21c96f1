"""Qt list model mirroring a :class:`ListDataProvider`."""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from PySide6.QtCore import QAbstractListModel, QByteArray, QModelIndex, QObject, Qt, Slot

from dynlist.core.provider import ListDataProvider
from dynlist.domain.item import ListDataItem

from .roles import Roles, role_names

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading..."


def amount_text(payload: Any) -> str:
    if payload is None:
        return LOADING_TEXT
    try:
        return f"Amount: {float(payload):.1f}"
    except (TypeError, ValueError):
        return str(payload)


class DynamicListModel(QAbstractListModel):
    """Expose provider rows to Qt views.

    The model keeps its own copy of the row list so ``rowCount`` changes only
    between the matching ``begin*``/``end*`` calls.  Views report the rows
    they display through :meth:`notify_row_visible`; reaching the end of the
    list through Qt's ``fetchMore`` protocol triggers the same growth check.
    """

    def __init__(self, provider: ListDataProvider, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._provider = provider
        snapshot = provider.snapshot()
        self._items: List[ListDataItem] = list(snapshot.items)
        self._generation: uuid.UUID = snapshot.generation

        provider.collection_reset.connect(self._on_collection_reset)
        provider.items_appended.connect(self._on_items_appended)
        provider.item_updated.connect(self._on_item_updated)

    @property
    def provider(self) -> ListDataProvider:
        return self._provider

    @property
    def generation(self) -> uuid.UUID:
        return self._generation

    def dispose(self) -> None:
        self._provider.collection_reset.disconnect(self._on_collection_reset)
        self._provider.items_appended.disconnect(self._on_items_appended)
        self._provider.item_updated.disconnect(self._on_item_updated)

    # ------------------------------------------------------------------
    # QAbstractListModel overrides
    # ------------------------------------------------------------------
    def roleNames(self) -> dict[int, QByteArray]:  # noqa: N802  # Qt override
        return role_names(super().roleNames())

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802
        if parent.isValid():
            return 0
        return len(self._items)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not 0 <= index.row() < len(self._items):
            return None
        item = self._items[index.row()]
        payload = item.payload

        if role == Qt.ItemDataRole.DisplayRole:
            return f"{item.label}    {amount_text(payload)}"
        if role == Roles.ITEM_INDEX:
            return item.index
        if role == Roles.PAYLOAD:
            return payload
        if role == Roles.FETCH_STATUS:
            return item.fetch_status.value
        if role == Roles.IS_FETCHED:
            return item.is_fetched
        if role == Roles.ROW_KEY:
            return (self._generation, item.index)
        if role == Roles.AMOUNT_TEXT:
            return amount_text(payload)
        return None

    def canFetchMore(self, parent: QModelIndex = QModelIndex()) -> bool:  # noqa: N802
        return not parent.isValid()

    def fetchMore(self, parent: QModelIndex = QModelIndex()) -> None:  # noqa: N802
        if parent.isValid():
            return
        self._provider.fetch_more_items_if_needed(len(self._items) - 1)

    # ------------------------------------------------------------------
    # Consumer slots
    # ------------------------------------------------------------------
    @Slot(int)
    def notify_row_visible(self, row: int) -> None:
        self._provider.fetch_more_items_if_needed(row)

    @Slot()
    def reset(self) -> None:
        self._provider.reset()

    # ------------------------------------------------------------------
    # Provider notifications
    # ------------------------------------------------------------------
    def _on_collection_reset(self, generation: uuid.UUID) -> None:
        self.beginResetModel()
        self._items = []
        self._generation = generation
        self.endResetModel()

    def _on_items_appended(self, generation: uuid.UUID, start: int, end: int) -> None:
        if generation != self._generation or end <= start:
            return
        self.beginInsertRows(QModelIndex(), start, end - 1)
        self._items.extend(self._provider.items[start:end])
        self.endInsertRows()

    def _on_item_updated(self, generation: uuid.UUID, item: ListDataItem) -> None:
        if generation != self._generation:
            return
        row = item.index
        if row >= len(self._items) or self._items[row] is not item:
            logger.debug("Ignoring update for unknown row %d", row)
            return
        model_index = self.index(row, 0)
        self.dataChanged.emit(model_index, model_index)
