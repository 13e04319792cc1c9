"""PySide6 window for browsing and selecting remote records."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPoint
from PySide6.QtGui import QAction, QColor, QKeySequence, QPalette
from PySide6.QtWidgets import (
    QApplication,
    QHeaderView,
    QLabel,
    QMainWindow,
    QMessageBox,
    QTableView,
    QToolBar,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from ..config import ViewConfig, default_view_config, load_view_config
from ..core.bulk import BulkSelectCommand
from ..core.ledger import SelectionLedger
from ..settings import BrowserSettings, get_settings
from ..store import HttpRecordSource, PageStore
from .controllers import PageController
from .models import CHECK_COLUMN, PageView, RecordTableModel
from .widgets import BulkSelectPopup, PaginatorWidget


logger = logging.getLogger(__name__)


class RecordBrowserWindow(QMainWindow):
    """Table of one remote page with row checkboxes and a paginator."""

    def __init__(
        self,
        controller: PageController,
        view_config: Optional[ViewConfig] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self.bulk_command = BulkSelectCommand(controller.ledger, controller.recompute)
        self.table_model = RecordTableModel(view_config or default_view_config(), self)
        self.setWindowTitle("Record Browser")
        self.resize(1100, 640)
        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        toolbar = QToolBar("Selection", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.bulk_button = QToolButton(self)
        self.bulk_button.setText("Select rows ▾")
        toolbar.addWidget(self.bulk_button)

        self.clear_action = QAction("Clear Selection", self)
        self.clear_action.setShortcut(QKeySequence("Ctrl+Shift+A"))
        toolbar.addAction(self.clear_action)

        self.refresh_action = QAction("Refresh", self)
        self.refresh_action.setShortcut(QKeySequence.StandardKey.Refresh)
        toolbar.addAction(self.refresh_action)

        self.bulk_popup = BulkSelectPopup(self)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self.table_view = QTableView(central)
        self.table_view.setModel(self.table_model)
        self.table_view.setAlternatingRowColors(True)
        self.table_view.setSelectionMode(QTableView.SelectionMode.NoSelection)
        self.table_view.setWordWrap(False)
        header = self.table_view.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(CHECK_COLUMN, QHeaderView.ResizeMode.ResizeToContents)
        layout.addWidget(self.table_view)

        self.paginator = PaginatorWidget(self.controller.store.page_size, central)
        layout.addWidget(self.paginator)
        self.setCentralWidget(central)

        self.selection_label = QLabel()
        self.statusBar().addPermanentWidget(self.selection_label)

    def _connect_signals(self) -> None:
        self.bulk_button.clicked.connect(self._show_bulk_popup)
        self.bulk_popup.bulk_submitted.connect(self.bulk_command.submit)
        self.clear_action.triggered.connect(self.controller.reset_session)
        self.refresh_action.triggered.connect(lambda: self.controller.refresh(asynchronous=True))

        self.table_model.toggle_requested.connect(self.controller.toggle)
        self.paginator.offset_requested.connect(
            lambda first: self.controller.go_to_offset(first, asynchronous=True)
        )

        self.controller.selection_changed.connect(self._on_selection_changed)
        self.controller.page_loaded.connect(self._on_page_loaded)
        self.controller.fetch_failed.connect(self._on_fetch_failed)
        self.controller.loading_changed.connect(self._on_loading_changed)

    def load_initial_page(self, page_index: int = 1) -> None:
        self.controller.request_page(page_index)

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------
    def _on_page_loaded(self, view: PageView) -> None:
        self.paginator.set_position(view.first, view.total_count)
        self.table_view.scrollToTop()

    def _on_selection_changed(self, view: PageView) -> None:
        self.table_model.set_view(view)
        self.selection_label.setText(
            f"{view.selected_total} selected of {view.total_count}"
        )

    def _on_fetch_failed(self, message: str) -> None:
        self.statusBar().showMessage("Fetch failed", 5000)
        QMessageBox.warning(self, "Fetch", f"Failed to load page: {message}")

    def _on_loading_changed(self, loading: bool) -> None:
        self.paginator.set_busy(loading)
        if loading:
            self.statusBar().showMessage("Loading…")
        else:
            self.statusBar().clearMessage()

    def _show_bulk_popup(self) -> None:
        self.bulk_popup.set_value(self.controller.ledger.bulk_target)
        anchor = self.bulk_button.mapToGlobal(QPoint(0, self.bulk_button.height()))
        self.bulk_popup.move(anchor)
        self.bulk_popup.show()
        self.bulk_popup.count_edit.setFocus()


def build_controller(settings: BrowserSettings, view_config: ViewConfig) -> PageController:
    source = HttpRecordSource(
        settings.endpoint,
        timeout_s=settings.request_timeout_s,
        fields=view_config.field_names,
    )
    store = PageStore(source, settings.page_size)
    ledger = SelectionLedger(settings.page_size)
    return PageController(store, ledger)


def _dark_palette() -> QPalette:
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Base, QColor(35, 35, 35))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(25, 25, 25))
    palette.setColor(QPalette.ColorRole.ToolTipText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Text, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(35, 35, 35))
    return palette


def run(initial_page: int = 1, settings: Optional[BrowserSettings] = None) -> None:
    settings = settings or get_settings()
    view_config = load_view_config(settings.view_config) if settings.view_config else default_view_config()

    app = QApplication.instance() or QApplication([])
    app.setStyle("Fusion")
    app.setPalette(_dark_palette())

    window = RecordBrowserWindow(build_controller(settings, view_config), view_config)
    window.show()
    window.load_initial_page(initial_page)
    app.exec()
