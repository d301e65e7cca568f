"""
Timer Table Widget
==================
Sortable QTableWidget that draws the projected rows.

Why is this file needed?
------------------------
1. Sorting: header clicks sort by raw values (datetimes, flags), not by the
   formatted text.
2. Identity: each row remembers the timer identity it shows, so the selection
   can be restored by identity after a full table replace.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QTableWidget, QTableWidgetItem, QHeaderView, QWidget

from timertable.config import COLUMNS, Column
from timertable.model.rows import Row

IDENTITY_ROLE = Qt.UserRole + 1


class SortableItem(QTableWidgetItem):
    """Table cell ordered by its sort key instead of its text."""

    def __init__(self, text: str, sort_key: Any) -> None:
        super().__init__(text)
        self.sort_key = sort_key

    def __lt__(self, other: QTableWidgetItem) -> bool:
        if isinstance(other, SortableItem):
            return self.sort_key < other.sort_key
        return super().__lt__(other)


class TimerTableWidget(QTableWidget):
    # Emits the identity under the cursor, or None
    selection_changed = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._identities: Dict[str, datetime] = {}

        self.setColumnCount(len(COLUMNS))
        self.setHorizontalHeaderLabels([spec.title for spec in COLUMNS.values()])

        header = self.horizontalHeader()
        for column, spec in COLUMNS.items():
            if spec.width is None:
                header.setSectionResizeMode(column, QHeaderView.Stretch)
            else:
                header.setSectionResizeMode(column, QHeaderView.Fixed)
                self.setColumnWidth(column, spec.width)

        self.verticalHeader().setVisible(False)
        self.setSelectionBehavior(QTableWidget.SelectRows)
        self.setSelectionMode(QTableWidget.SingleSelection)
        self.setEditTriggers(QTableWidget.NoEditTriggers)

        self.setSortingEnabled(True)
        self.sortByColumn(Column.START, Qt.AscendingOrder)

        self.currentCellChanged.connect(self._on_current_cell_changed)

    # --- RENDERER ---

    def replace_rows(self, rows: Sequence[Row]) -> None:
        """Replace the whole table; the active sort column is re-applied afterwards."""
        self.blockSignals(True)
        sorting = self.isSortingEnabled()
        # Inserting with sorting on would reorder rows mid-fill
        self.setSortingEnabled(False)

        self.clearContents()
        self.setRowCount(len(rows))
        self._identities = {}

        for r, row in enumerate(rows):
            key = row.identity.isoformat()
            self._identities[key] = row.identity
            for column, text in zip(Column, row.cells()):
                item = SortableItem(text, row.sort_key(column))
                item.setData(IDENTITY_ROLE, key)
                if column == Column.FINISHED:
                    item.setTextAlignment(Qt.AlignCenter)
                self.setItem(r, column, item)

        self.setSortingEnabled(sorting)
        self.blockSignals(False)

    def select_identity(self, identity: datetime) -> bool:
        r = self.row_of(identity)
        if r < 0:
            return False
        self.setCurrentCell(r, Column.START)
        self.scrollToItem(self.item(r, Column.START))
        return True

    def select_default(self) -> Optional[datetime]:
        if self.rowCount() == 0:
            self.setCurrentCell(-1, -1)
            self.selection_changed.emit(None)
            return None
        self.setCurrentCell(0, Column.START)
        self.scrollToTop()
        return self.identity_at(0)

    def displayed_identities(self) -> List[datetime]:
        identities = [self.identity_at(r) for r in range(self.rowCount())]
        return [i for i in identities if i is not None]

    # --- LOOKUPS ---

    def identity_at(self, row: int) -> Optional[datetime]:
        item = self.item(row, Column.START)
        if item is None:
            return None
        return self._identities.get(item.data(IDENTITY_ROLE))

    def row_of(self, identity: datetime) -> int:
        for r in range(self.rowCount()):
            if self.identity_at(r) == identity:
                return r
        return -1

    def current_identity(self) -> Optional[datetime]:
        r = self.currentRow()
        return self.identity_at(r) if r >= 0 else None

    # --- SLOTS ---

    def _on_current_cell_changed(self, row: int, column: int, prev_row: int, prev_column: int) -> None:
        self.selection_changed.emit(self.identity_at(row) if row >= 0 else None)
