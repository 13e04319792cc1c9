"""Selection core: paging arithmetic, the selection ledger and bulk selection."""

from .bulk import BulkSelectCommand, coerce_bulk_target
from .ledger import LedgerMode, LedgerSnapshot, SelectionLedger
from .paging import (
    FIRST_PAGE,
    bulk_count_on_page,
    offset_from_page,
    page_count,
    page_from_offset,
    records_on_page,
)
from .records import PageResult, Record, RecordId

__all__ = [
    "BulkSelectCommand",
    "coerce_bulk_target",
    "LedgerMode",
    "LedgerSnapshot",
    "SelectionLedger",
    "FIRST_PAGE",
    "bulk_count_on_page",
    "offset_from_page",
    "page_count",
    "page_from_offset",
    "records_on_page",
    "PageResult",
    "Record",
    "RecordId",
]
