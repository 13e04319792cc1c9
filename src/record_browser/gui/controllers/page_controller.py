"""Page navigation controller tying the page store to the selection ledger."""

from __future__ import annotations

import logging
from typing import Optional, Union

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from ...core.ledger import SelectionLedger
from ...core.paging import FIRST_PAGE, page_from_offset
from ...core.records import PageResult, RecordId
from ...store import FetchError, PageStore
from ..models import PageView


logger = logging.getLogger(__name__)


class _FetchSignals(QObject):
    finished = Signal(int, object)  # (token, PageResult)
    failed = Signal(int, object)  # (token, Exception)


class FetchWorker(QRunnable):
    """Runs one page fetch on the thread pool and reports back by signal."""

    def __init__(self, store: PageStore, page_index: int, token: int) -> None:
        super().__init__()
        self.signals = _FetchSignals()
        self._store = store
        self._page_index = page_index
        self._token = token

    def run(self) -> None:  # noqa: D401
        try:
            result = self._store.fetch_page(self._page_index)
        except Exception as exc:  # noqa: BLE001
            self.signals.failed.emit(self._token, exc)
            return
        self.signals.finished.emit(self._token, result)


class PageController(QObject):
    """Fetches pages and recomputes the visible selection.

    Every fetch request gets a token. Only the result of the most recent
    request is applied; earlier ones are dropped when they arrive.
    Navigation never changes the ledger.
    """

    page_loaded = Signal(object)  # Emits PageView
    selection_changed = Signal(object)  # Emits PageView
    fetch_failed = Signal(str)
    loading_changed = Signal(bool)

    def __init__(
        self,
        store: PageStore,
        ledger: SelectionLedger,
        parent: QObject | None = None,
        thread_pool: Optional[QThreadPool] = None,
    ) -> None:
        super().__init__(parent)
        if store.page_size != ledger.page_size:
            raise ValueError(
                f"Store page size {store.page_size} does not match ledger page size {ledger.page_size}"
            )
        self._store = store
        self._ledger = ledger
        if thread_pool is None:
            # The source's HTTP session is used by one worker at a time.
            thread_pool = QThreadPool(self)
            thread_pool.setMaxThreadCount(1)
        self._thread_pool = thread_pool
        self._latest_token = 0
        self._pending_page: Optional[int] = None
        self._view: Optional[PageView] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def store(self) -> PageStore:
        return self._store

    @property
    def ledger(self) -> SelectionLedger:
        return self._ledger

    @property
    def thread_pool(self) -> QThreadPool:
        return self._thread_pool

    @property
    def current_view(self) -> Optional[PageView]:
        return self._view

    @property
    def page_index(self) -> int:
        return self._store.page_index

    @property
    def is_loading(self) -> bool:
        return self._pending_page is not None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def go_to_page(self, page_index: int) -> bool:
        """Fetch ``page_index`` on the calling thread; return True on success."""
        token = self.begin_fetch(page_index)
        try:
            result = self._store.fetch_page(page_index)
        except FetchError as exc:
            return self.fail_fetch(token, exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while fetching page %d", page_index)
            return self.fail_fetch(token, exc)
        return self.complete_fetch(token, result)

    def request_page(self, page_index: int) -> int:
        """Fetch ``page_index`` on the thread pool and return the request token."""
        token = self.begin_fetch(page_index)
        worker = FetchWorker(self._store, page_index, token)
        worker.signals.finished.connect(self.complete_fetch)
        worker.signals.failed.connect(self.fail_fetch)
        self._thread_pool.start(worker)
        return token

    def go_to_offset(self, first: int, asynchronous: bool = False) -> Union[bool, int]:
        """Navigate from a paginator row offset."""
        page_index = page_from_offset(first, self._store.page_size)
        if asynchronous:
            return self.request_page(page_index)
        return self.go_to_page(page_index)

    def refresh(self, asynchronous: bool = False) -> Union[bool, int]:
        """Refetch the current page."""
        page_index = self._store.page_index
        if asynchronous:
            return self.request_page(page_index)
        return self.go_to_page(page_index)

    @Slot(int, object)
    def complete_fetch(self, token: int, result: PageResult) -> bool:
        """Apply a fetched page unless a newer request has started since."""
        if token != self._latest_token:
            logger.debug(
                "Discarding stale page %d (request %d, latest %d)",
                result.page_index,
                token,
                self._latest_token,
            )
            return False
        self._store.commit(result)
        self._finish_loading()
        view = self._build_view()
        self.page_loaded.emit(view)
        self.selection_changed.emit(view)
        return True

    @Slot(int, object)
    def fail_fetch(self, token: int, error: Union[Exception, str]) -> bool:
        """Report a failed fetch; the displayed page and ledger stay as they are."""
        if token != self._latest_token:
            logger.debug("Ignoring failure of superseded request %d: %s", token, error)
            return False
        self._finish_loading()
        message = str(error)
        logger.error("Page fetch failed: %s", message)
        self.fetch_failed.emit(message)
        return False

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def recompute(self) -> Optional[PageView]:
        """Recompute the visible selection of the committed page."""
        if self._store.current is None:
            return None
        view = self._build_view()
        self.selection_changed.emit(view)
        return view

    def toggle(self, record_id: RecordId, selected: bool) -> bool:
        """Apply a row toggle; ids missing from the current page are ignored."""
        current = self._store.current
        if current is None:
            logger.debug("Toggle for %s ignored: no page loaded", record_id)
            return False
        in_page_index = current.index_of(record_id)
        if in_page_index is None:
            logger.debug("Toggle for %s ignored: not on page %d", record_id, current.page_index)
            return False
        changed = self._ledger.apply_toggle(
            current.page_index,
            in_page_index,
            record_id,
            selected,
        )
        self.recompute()
        return changed

    def reset_session(self) -> None:
        """Forget every selection and redraw the current page."""
        self._ledger.reset()
        logger.info("Selection session reset")
        self.recompute()

    # ------------------------------------------------------------------
    def begin_fetch(self, page_index: int) -> int:
        """Start a request for ``page_index`` and return its token."""
        if page_index < FIRST_PAGE:
            raise ValueError(f"Page indices start at {FIRST_PAGE}, got {page_index}")
        self._latest_token += 1
        was_loading = self.is_loading
        self._pending_page = page_index
        if not was_loading:
            self.loading_changed.emit(True)
        logger.debug("Requesting page %d (request %d)", page_index, self._latest_token)
        return self._latest_token

    def _finish_loading(self) -> None:
        self._pending_page = None
        self.loading_changed.emit(False)

    def _build_view(self) -> PageView:
        current = self._store.current
        assert current is not None
        view = PageView(
            page_index=current.page_index,
            page_size=self._store.page_size,
            records=current.records,
            selection=self._ledger.compute_visible_selection(current.page_index, current.records),
            total_count=current.total_count,
            selected_total=self._ledger.selected_total(current.total_count),
        )
        self._view = view
        return view
