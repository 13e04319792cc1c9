"""Selection ledger reconciling row toggles with a cross-page bulk target.

Two channels feed the visible selection of a page:

* the bulk channel selects the first ``N`` records of the global,
  page-ordered sequence, minus per-page exceptions;
* the explicit channel holds rows picked by direct action.

A row is selected when either channel selects it. Nothing per-record is
cached: the visible selection is always recomputed from the ledger state and
the page's records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Sequence, Set, Tuple

from .paging import FIRST_PAGE, bulk_count_on_page, page_count, records_on_page
from .records import Record, RecordId


logger = logging.getLogger(__name__)


class LedgerMode(str, Enum):
    IDLE = "idle"
    BULK_ACTIVE = "bulk_active"


@dataclass(frozen=True)
class LedgerSnapshot:
    """Read-only copy of the ledger state; the page maps are mapping proxies."""

    bulk_target: int
    exceptions: Mapping[int, FrozenSet[int]] = field(default_factory=lambda: MappingProxyType({}))
    explicit: Mapping[int, FrozenSet[int]] = field(default_factory=lambda: MappingProxyType({}))

    def __hash__(self) -> int:
        return hash(
            (
                self.bulk_target,
                frozenset(self.exceptions.items()),
                frozenset(self.explicit.items()),
            )
        )

    @property
    def mode(self) -> LedgerMode:
        return LedgerMode.BULK_ACTIVE if self.bulk_target > 0 else LedgerMode.IDLE


def _freeze(pages: Mapping[int, Set[int]]) -> Mapping[int, FrozenSet[int]]:
    return MappingProxyType(
        {page: frozenset(indices) for page, indices in sorted(pages.items()) if indices}
    )


class SelectionLedger:
    """Owns the bulk target, exception set and explicit selection of a session."""

    def __init__(self, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._page_size = page_size
        self._bulk_target = 0
        self._exceptions: Dict[int, Set[int]] = {}
        self._explicit: Dict[int, Set[int]] = {}

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def bulk_target(self) -> int:
        return self._bulk_target

    @property
    def mode(self) -> LedgerMode:
        return LedgerMode.BULK_ACTIVE if self._bulk_target > 0 else LedgerMode.IDLE

    def exceptions_for(self, page_index: int) -> FrozenSet[int]:
        return frozenset(self._exceptions.get(page_index, ()))

    def explicit_for(self, page_index: int) -> FrozenSet[int]:
        return frozenset(self._explicit.get(page_index, ()))

    def bulk_count_on_page(self, page_index: int) -> int:
        return bulk_count_on_page(self._bulk_target, page_index, self._page_size)

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            bulk_target=self._bulk_target,
            exceptions=_freeze(self._exceptions),
            explicit=_freeze(self._explicit),
        )

    # ------------------------------------------------------------------
    # Visible selection
    # ------------------------------------------------------------------
    def compute_visible_selection(
        self,
        page_index: int,
        records: Sequence[Record],
    ) -> Tuple[bool, ...]:
        """
        Return one flag per record of ``page_index`` telling whether it is selected.

        The first ``bulk_count_on_page`` records are selected by the bulk
        channel unless excepted; explicitly selected indices always win.
        """
        bulk_count = self.bulk_count_on_page(page_index)
        excepted = self._exceptions.get(page_index, set())
        explicit = self._explicit.get(page_index, set())
        return tuple(
            (idx < bulk_count and idx not in excepted) or idx in explicit
            for idx in range(len(records))
        )

    def selected_indices(self, page_index: int, records: Sequence[Record]) -> List[int]:
        flags = self.compute_visible_selection(page_index, records)
        return [idx for idx, flag in enumerate(flags) if flag]

    def selected_ids(self, page_index: int, records: Sequence[Record]) -> List[RecordId]:
        flags = self.compute_visible_selection(page_index, records)
        return [record.id for record, flag in zip(records, flags) if flag]

    def selected_total(self, total_count: int) -> int:
        """Count selected records across every page of a source holding ``total_count``."""
        if total_count <= 0:
            return 0
        total = min(self._bulk_target, total_count)
        last_page = page_count(total_count, self._page_size)
        for page_index, indices in self._exceptions.items():
            if page_index > last_page:
                continue
            limit = min(
                self.bulk_count_on_page(page_index),
                records_on_page(page_index, total_count, self._page_size),
            )
            total -= sum(1 for idx in indices if idx < limit)
        for page_index, indices in self._explicit.items():
            if page_index > last_page:
                continue
            bulk_count = self.bulk_count_on_page(page_index)
            available = records_on_page(page_index, total_count, self._page_size)
            total += sum(1 for idx in indices if bulk_count <= idx < available)
        return total

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_bulk_target(self, target: int) -> None:
        """
        Replace the bulk target.

        ``target <= 0`` returns the ledger to idle and clears every exception
        and explicit selection. A positive target starts a fresh exception
        set; explicit selections are kept.
        """
        self._exceptions.clear()
        if target <= 0:
            self._bulk_target = 0
            self._explicit.clear()
            logger.debug("Bulk target cleared; ledger idle")
            return
        self._bulk_target = int(target)
        logger.debug("Bulk target set to %d", self._bulk_target)

    def apply_toggle(
        self,
        page_index: int,
        in_page_index: int,
        record_id: RecordId,
        want_selected: bool,
    ) -> bool:
        """
        Record a user toggle of one row and return whether the ledger changed.

        Deselecting drops the row from the explicit channel and, inside the
        bulk range, adds an exception. Selecting removes any exception and
        adds the row to the explicit channel.
        """
        if page_index < FIRST_PAGE:
            raise ValueError(f"Page indices start at {FIRST_PAGE}, got {page_index}")
        if in_page_index < 0:
            raise ValueError(f"In-page index must be non-negative, got {in_page_index}")

        before = self.snapshot()
        if want_selected:
            self._discard(self._exceptions, page_index, in_page_index)
            self._explicit.setdefault(page_index, set()).add(in_page_index)
        else:
            self._discard(self._explicit, page_index, in_page_index)
            if in_page_index < self.bulk_count_on_page(page_index):
                self._exceptions.setdefault(page_index, set()).add(in_page_index)

        changed = self.snapshot() != before
        if changed:
            logger.debug(
                "Record %s on page %d (row %d) %s",
                record_id,
                page_index,
                in_page_index,
                "selected" if want_selected else "deselected",
            )
        return changed

    def reset(self) -> None:
        """Forget the whole session: bulk target, exceptions and explicit picks."""
        self._bulk_target = 0
        self._exceptions.clear()
        self._explicit.clear()

    @staticmethod
    def _discard(pages: Dict[int, Set[int]], page_index: int, in_page_index: int) -> None:
        indices = pages.get(page_index)
        if indices is None:
            return
        indices.discard(in_page_index)
        if not indices:
            del pages[page_index]
