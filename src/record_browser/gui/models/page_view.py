"""Render payload handed to the table view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ...core.paging import offset_from_page
from ...core.records import Record, RecordId


@dataclass(frozen=True)
class PageView:
    """Records of the displayed page together with their visible selection.

    Attributes:
        page_index: 1-based page index
        page_size: Configured page size
        records: Records in page order
        selection: One flag per record, True when selected
        total_count: Total number of records reported by the source
        selected_total: Selected records across all pages
    """
    page_index: int
    page_size: int
    records: Tuple[Record, ...]
    selection: Tuple[bool, ...]
    total_count: int
    selected_total: int = 0

    @property
    def first(self) -> int:
        """Paginator row offset of the page."""
        return offset_from_page(self.page_index, self.page_size)

    @property
    def selected_ids(self) -> List[RecordId]:
        return [record.id for record, flag in zip(self.records, self.selection) if flag]

    @property
    def selected_indices(self) -> List[int]:
        return [idx for idx, flag in enumerate(self.selection) if flag]

    def is_selected(self, row: int) -> bool:
        if row < 0 or row >= len(self.selection):
            return False
        return self.selection[row]
