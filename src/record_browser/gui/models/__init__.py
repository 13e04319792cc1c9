"""Data models for the GUI application."""

from .page_view import PageView
from .record_table import CHECK_COLUMN, RecordTableModel

__all__ = [
    "PageView",
    "RecordTableModel",
    "CHECK_COLUMN",
]
