"""Role definitions exposed by :class:`DynamicListModel`."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

from PySide6.QtCore import QByteArray, Qt


class Roles(IntEnum):
    ITEM_INDEX = Qt.ItemDataRole.UserRole + 1
    PAYLOAD = Qt.ItemDataRole.UserRole + 2
    FETCH_STATUS = Qt.ItemDataRole.UserRole + 3
    IS_FETCHED = Qt.ItemDataRole.UserRole + 4
    ROW_KEY = Qt.ItemDataRole.UserRole + 5
    AMOUNT_TEXT = Qt.ItemDataRole.UserRole + 6


def role_names(base: Dict[int, QByteArray] | None = None) -> Dict[int, QByteArray]:
    """Return a mapping of Qt role numbers to QML property names."""

    mapping: Dict[int, QByteArray] = {} if base is None else dict(base)
    mapping.update(
        {
            Roles.ITEM_INDEX: QByteArray(b"itemIndex"),
            Roles.PAYLOAD: QByteArray(b"payload"),
            Roles.FETCH_STATUS: QByteArray(b"fetchStatus"),
            Roles.IS_FETCHED: QByteArray(b"isFetched"),
            Roles.ROW_KEY: QByteArray(b"rowKey"),
            Roles.AMOUNT_TEXT: QByteArray(b"amountText"),
        }
    )
    return mapping
