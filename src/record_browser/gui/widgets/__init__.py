"""GUI widgets for the record browser."""

from .bulk_select import BulkSelectPopup
from .paginator import PaginatorWidget

__all__ = [
    "BulkSelectPopup",
    "PaginatorWidget",
]
