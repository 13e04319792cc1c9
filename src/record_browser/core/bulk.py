"""Bulk "select the first N records" command."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Optional

from .ledger import SelectionLedger


logger = logging.getLogger(__name__)


def coerce_bulk_target(raw: Any) -> int:
    """
    Turn user input into a bulk target.

    Non-negative integers (or strings / floats holding one) pass through.
    Anything else, including negatives, fractions, booleans and ``None``,
    becomes 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw if raw > 0 else 0
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            return 0
        return max(0, int(raw))
    if isinstance(raw, str):
        text = raw.strip().replace("_", "")
        if not text:
            return 0
        try:
            return coerce_bulk_target(int(text))
        except ValueError:
            pass
        try:
            return coerce_bulk_target(float(text))
        except ValueError:
            return 0
    return 0


class BulkSelectCommand:
    """Validates a bulk target and applies it to the ledger."""

    def __init__(
        self,
        ledger: SelectionLedger,
        recompute: Optional[Callable[[], Any]] = None,
    ) -> None:
        self._ledger = ledger
        self._recompute = recompute

    def submit(self, raw: Any) -> int:
        """Apply ``raw`` as the new bulk target and refresh the current page."""
        target = coerce_bulk_target(raw)
        logger.debug("Bulk target input %r coerced to %d", raw, target)
        self._ledger.set_bulk_target(target)
        if target:
            logger.info("Bulk selection set to first %d records", target)
        else:
            logger.info("Bulk selection cleared")
        if self._recompute is not None:
            self._recompute()
        return target
