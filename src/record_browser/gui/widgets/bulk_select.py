"""Popup for entering a "select the first N rows" request."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFrame, QLineEdit, QPushButton, QVBoxLayout, QWidget


class BulkSelectPopup(QFrame):
    """Small popup with a number field and a Submit button.

    The raw text is emitted unchanged; validation belongs to the bulk command.
    """

    bulk_submitted = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent, Qt.WindowType.Popup)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self.count_edit = QLineEdit()
        self.count_edit.setPlaceholderText("Select rows...")
        self.count_edit.setClearButtonEnabled(True)
        layout.addWidget(self.count_edit)

        self.submit_button = QPushButton("Submit")
        layout.addWidget(self.submit_button, alignment=Qt.AlignmentFlag.AlignRight)

    def _connect_signals(self) -> None:
        self.submit_button.clicked.connect(self._submit)
        self.count_edit.returnPressed.connect(self._submit)

    def set_value(self, value: int) -> None:
        self.count_edit.setText(str(value) if value > 0 else "")

    def _submit(self) -> None:
        self.bulk_submitted.emit(self.count_edit.text())
        self.hide()
