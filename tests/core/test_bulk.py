"""
Unit Tests for BulkSelectCommand and bulk target coercion
"""

from unittest.mock import MagicMock

import pytest

from record_browser.core.bulk import BulkSelectCommand, coerce_bulk_target
from record_browser.core.ledger import LedgerMode, SelectionLedger

from conftest import PAGE_SIZE


class TestCoerceBulkTarget:
    """Invalid input becomes 0 instead of raising."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (15, 15),
            (0, 0),
            ("15", 15),
            (" 7 ", 7),
            ("1_000", 1000),
            (12.0, 12),
            ("12.0", 12),
        ],
    )
    def test_coerce_when_non_negative_integer_then_passes_through(self, raw, expected):
        assert coerce_bulk_target(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [-3, "-3", "abc", "", "   ", None, True, False, 12.5, "2.5", float("nan"), float("inf"), [3]],
    )
    def test_coerce_when_invalid_then_zero(self, raw):
        assert coerce_bulk_target(raw) == 0


class TestBulkSelectCommand:
    """Tests for submitting a bulk target."""

    @pytest.fixture
    def ledger(self) -> SelectionLedger:
        return SelectionLedger(PAGE_SIZE)

    def test_submit_when_valid_then_target_applied_and_recomputed(self, ledger):
        recompute = MagicMock()
        command = BulkSelectCommand(ledger, recompute)

        result = command.submit("15")

        assert result == 15
        assert ledger.bulk_target == 15
        assert ledger.mode is LedgerMode.BULK_ACTIVE
        recompute.assert_called_once_with()

    def test_submit_when_invalid_then_existing_target_cleared(self, ledger):
        ledger.set_bulk_target(30)
        command = BulkSelectCommand(ledger, MagicMock())

        assert command.submit("lots") == 0
        assert ledger.mode is LedgerMode.IDLE

    def test_submit_when_no_recompute_callback_then_ledger_still_updated(self, ledger):
        BulkSelectCommand(ledger).submit(4)
        assert ledger.bulk_target == 4
