"""
Record browser: a paginated remote record list with cross-page bulk selection.

The selection logic lives in :mod:`record_browser.core` and does not depend
on Qt; the PySide6 window in :mod:`record_browser.gui` only renders pages and
forwards user events.
"""

from .config import (
    ColumnConfig,
    PagePayload,
    ViewConfig,
    ViewConfigError,
    default_view_config,
    load_view_config,
)
from .core import (
    BulkSelectCommand,
    LedgerMode,
    LedgerSnapshot,
    PageResult,
    Record,
    SelectionLedger,
    coerce_bulk_target,
    offset_from_page,
    page_from_offset,
)
from .settings import BrowserSettings, get_settings, reset_settings_cache
from .store import FetchError, HttpRecordSource, PageStore

__all__ = [
    "ColumnConfig",
    "PagePayload",
    "ViewConfig",
    "ViewConfigError",
    "default_view_config",
    "load_view_config",
    "BulkSelectCommand",
    "LedgerMode",
    "LedgerSnapshot",
    "PageResult",
    "Record",
    "SelectionLedger",
    "coerce_bulk_target",
    "offset_from_page",
    "page_from_offset",
    "BrowserSettings",
    "get_settings",
    "reset_settings_cache",
    "FetchError",
    "HttpRecordSource",
    "PageStore",
]
