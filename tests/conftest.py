import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

# Add src to sys.path so we can import record_browser
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from record_browser.core.records import PageResult, Record  # noqa: E402
from record_browser.settings import reset_settings_cache  # noqa: E402
from record_browser.store import FetchError  # noqa: E402


PAGE_SIZE = 12


def make_page(page_index: int, total_count: int, page_size: int = PAGE_SIZE) -> PageResult:
    """Build the page a source holding ``total_count`` sequential records would return."""
    start = (page_index - 1) * page_size
    stop = min(start + page_size, total_count)
    records = tuple(
        Record(id=1000 + n, fields={"title": f"Artwork {n}", "date_start": 1900 + n})
        for n in range(start, max(start, stop))
    )
    return PageResult(page_index=page_index, records=records, total_count=total_count)


class FakeSource:
    """In-memory record source; entries may be exceptions to raise."""

    def __init__(self, total_count: int = 40, page_size: int = PAGE_SIZE) -> None:
        self.total_count = total_count
        self.page_size = page_size
        self.failures: Dict[int, Exception] = {}
        self.calls: List[int] = []

    def fail_page(self, page_index: int, error: Optional[Exception] = None) -> None:
        self.failures[page_index] = error or FetchError(f"page {page_index} unavailable", page_index)

    def fetch(self, page_index: int) -> PageResult:
        self.calls.append(page_index)
        error: Union[Exception, None] = self.failures.get(page_index)
        if error is not None:
            raise error
        return make_page(page_index, self.total_count, self.page_size)


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings independent of the developer's .env and environment."""
    for name in list(os.environ):
        if name.startswith("RECORD_BROWSER_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings_cache()
    yield
    reset_settings_cache()
