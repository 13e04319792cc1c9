"""Paginator widget reporting 0-based row offsets."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from ...core.paging import offset_from_page, page_count, page_from_offset


class PaginatorWidget(QWidget):
    """First / previous / next / last buttons around a page label.

    Emits :attr:`offset_requested` with the row offset of the first record of
    the requested page, the same convention the table's row numbers use.
    """

    offset_requested = Signal(int)

    def __init__(self, page_size: int, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._page_size = page_size
        self._first = 0
        self._total = 0
        self._setup_ui()
        self._connect_signals()
        self._update_state()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(6)

        self.first_button = QPushButton("«")
        self.prev_button = QPushButton("‹")
        self.page_label = QLabel()
        self.page_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.next_button = QPushButton("›")
        self.last_button = QPushButton("»")
        for button in (self.first_button, self.prev_button, self.next_button, self.last_button):
            button.setFixedWidth(32)

        layout.addStretch()
        layout.addWidget(self.first_button)
        layout.addWidget(self.prev_button)
        layout.addWidget(self.page_label)
        layout.addWidget(self.next_button)
        layout.addWidget(self.last_button)
        layout.addStretch()

    def _connect_signals(self) -> None:
        self.first_button.clicked.connect(lambda: self._request_page(1))
        self.prev_button.clicked.connect(lambda: self._request_page(self.current_page - 1))
        self.next_button.clicked.connect(lambda: self._request_page(self.current_page + 1))
        self.last_button.clicked.connect(lambda: self._request_page(self.page_count))

    @property
    def current_page(self) -> int:
        return page_from_offset(self._first, self._page_size)

    @property
    def page_count(self) -> int:
        return max(1, page_count(self._total, self._page_size))

    def set_position(self, first: int, total: int) -> None:
        """Reflect the displayed page without emitting a request."""
        self._first = max(0, first)
        self._total = max(0, total)
        self._update_state()

    def set_busy(self, busy: bool) -> None:
        for button in (self.first_button, self.prev_button, self.next_button, self.last_button):
            button.setEnabled(not busy)
        if not busy:
            self._update_state()

    def _request_page(self, page_index: int) -> None:
        page_index = max(1, min(page_index, self.page_count))
        if page_index == self.current_page:
            return
        self.offset_requested.emit(offset_from_page(page_index, self._page_size))

    def _update_state(self) -> None:
        current = self.current_page
        last = self.page_count
        self.page_label.setText(f"Page {current} of {last}")
        self.first_button.setEnabled(current > 1)
        self.prev_button.setEnabled(current > 1)
        self.next_button.setEnabled(current < last)
        self.last_button.setEnabled(current < last)
