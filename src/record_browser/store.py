"""
Page fetching and the current-page store.

:class:`HttpRecordSource` talks to the remote endpoint and turns its JSON
body into :class:`~record_browser.core.records.PageResult` objects.
:class:`PageStore` keeps the page that is currently displayed. A fetch never
touches the current page; only :meth:`PageStore.commit` does.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import requests
from pydantic import ValidationError

from .config import PagePayload
from .core.paging import FIRST_PAGE, page_count
from .core.records import PageResult, Record


logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a page cannot be fetched or its body cannot be parsed."""

    def __init__(self, message: str, page_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.page_index = page_index


class HttpRecordSource:
    """Fetches pages with ``GET <endpoint>?page=<n>`` (1-based ``n``)."""

    def __init__(
        self,
        endpoint: str,
        timeout_s: float = 30.0,
        fields: Optional[Sequence[str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self._fields: Optional[Tuple[str, ...]] = tuple(fields) if fields else None
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")

    def fetch(self, page_index: int) -> PageResult:
        if page_index < FIRST_PAGE:
            raise ValueError(f"Page indices start at {FIRST_PAGE}, got {page_index}")
        logger.debug("GET %s page=%d", self.endpoint, page_index)
        try:
            resp = self._session.get(
                self.endpoint,
                params={"page": page_index},
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch page {page_index}: {exc}", page_index) from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise FetchError(f"Page {page_index} response is not JSON: {exc}", page_index) from exc

        try:
            payload = PagePayload.model_validate(body)
        except ValidationError as exc:
            raise FetchError(f"Malformed body for page {page_index}: {exc}", page_index) from exc

        records = tuple(self._to_record(entry.id, entry.field_values()) for entry in payload.data)
        return PageResult(
            page_index=page_index,
            records=records,
            total_count=payload.pagination.total,
        )

    def close(self) -> None:
        self._session.close()

    def _to_record(self, record_id, values: dict) -> Record:
        if self._fields is None:
            return Record(id=record_id, fields=values)
        return Record(id=record_id, fields={name: values.get(name) for name in self._fields})


class PageStore:
    """Holds the currently displayed page and the total record count."""

    def __init__(self, source, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._source = source
        self._page_size = page_size
        self._current: Optional[PageResult] = None

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current(self) -> Optional[PageResult]:
        return self._current

    @property
    def page_index(self) -> int:
        return self._current.page_index if self._current else FIRST_PAGE

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._current.records if self._current else ()

    @property
    def total_count(self) -> int:
        """Total reported by the source; 0 until a page has been committed."""
        return self._current.total_count if self._current else 0

    @property
    def page_count(self) -> int:
        return page_count(self.total_count, self._page_size)

    def fetch_page(self, page_index: int) -> PageResult:
        """Fetch ``page_index`` without changing the current page."""
        result = self._source.fetch(page_index)
        if len(result.records) > self._page_size:
            logger.warning(
                "Page %d returned %d records but the configured page size is %d",
                page_index,
                len(result.records),
                self._page_size,
            )
        return result

    def commit(self, result: PageResult) -> None:
        self._current = result
        logger.debug(
            "Page %d committed: %d records of %d",
            result.page_index,
            len(result.records),
            result.total_count,
        )

    def load_page(self, page_index: int) -> PageResult:
        """Fetch and commit ``page_index``; the current page is kept on failure."""
        result = self.fetch_page(page_index)
        self.commit(result)
        return result

    def clear(self) -> None:
        self._current = None
