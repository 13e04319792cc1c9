"""Qt table model presenting one page of records with a checkbox column."""

from __future__ import annotations

from typing import Any, List, Optional

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt, Signal

from ...config import ViewConfig, default_view_config
from .page_view import PageView


CHECK_COLUMN = 0


class RecordTableModel(QAbstractTableModel):
    """Read-only record table; checkbox edits are forwarded, not stored.

    The check state shown for each row always comes from the last
    :class:`PageView`. Clicking a checkbox emits :attr:`toggle_requested`
    and the model waits for the next view to change what it displays.
    """

    toggle_requested = Signal(object, bool)  # (record_id, selected)

    def __init__(self, view_config: Optional[ViewConfig] = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._view_config = view_config or default_view_config()
        self._view: Optional[PageView] = None

    @property
    def page_view(self) -> Optional[PageView]:
        return self._view

    def set_view(self, view: PageView) -> None:
        same_rows = (
            self._view is not None
            and self._view.page_index == view.page_index
            and [r.id for r in self._view.records] == [r.id for r in view.records]
        )
        if not same_rows:
            self.beginResetModel()
            self._view = view
            self.endResetModel()
            return
        self._view = view
        if view.records:
            top = self.index(0, CHECK_COLUMN)
            bottom = self.index(len(view.records) - 1, CHECK_COLUMN)
            self.dataChanged.emit(top, bottom, [Qt.ItemDataRole.CheckStateRole])

    # ------------------------------------------------------------------
    # QAbstractTableModel interface
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: B008
        if parent.isValid() or self._view is None:
            return 0
        return len(self._view.records)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: B008
        if parent.isValid():
            return 0
        return len(self._view_config.columns) + 1

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Vertical:
            if self._view is None:
                return None
            return str(self._view.first + section + 1)
        if section == CHECK_COLUMN:
            return ""
        return self._view_config.headers[section - 1]

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or self._view is None:
            return None
        row, column = index.row(), index.column()
        if row >= len(self._view.records):
            return None
        if column == CHECK_COLUMN:
            if role == Qt.ItemDataRole.CheckStateRole:
                selected = self._view.is_selected(row)
                return Qt.CheckState.Checked if selected else Qt.CheckState.Unchecked
            return None
        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.ToolTipRole):
            field_name = self._view_config.columns[column - 1].field
            value = self._view.records[row].get(field_name)
            return "" if value is None else str(value)
        return None

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        flags = Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable
        if index.column() == CHECK_COLUMN:
            flags |= Qt.ItemFlag.ItemIsUserCheckable
        return flags

    def setData(self, index: QModelIndex, value: Any, role: int = Qt.ItemDataRole.EditRole) -> bool:
        if (
            not index.isValid()
            or self._view is None
            or index.column() != CHECK_COLUMN
            or role != Qt.ItemDataRole.CheckStateRole
        ):
            return False
        record = self._view.records[index.row()]
        self.toggle_requested.emit(record.id, _is_checked(value))
        return True

    def checked_rows(self) -> List[int]:
        if self._view is None:
            return []
        return self._view.selected_indices


def _is_checked(value: Any) -> bool:
    if isinstance(value, Qt.CheckState):
        return value == Qt.CheckState.Checked
    try:
        return int(value) == Qt.CheckState.Checked.value
    except (TypeError, ValueError):
        return bool(value)
