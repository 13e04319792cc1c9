"""
Unit Tests for HttpRecordSource and PageStore
"""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from record_browser.store import FetchError, HttpRecordSource, PageStore

from conftest import PAGE_SIZE, FakeSource


ENDPOINT = "https://example.org/api/v1/artworks"


def make_response(body=None, status_error=None, json_error=None) -> MagicMock:
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


def make_session(response) -> MagicMock:
    session = MagicMock()
    session.headers = {}
    session.get.return_value = response
    return session


SAMPLE_BODY = {
    "pagination": {"total": 125, "limit": 12, "current_page": 2},
    "data": [
        {"id": 27992, "title": "A Sunday on La Grande Jatte", "date_start": 1884, "api_link": "x"},
        {"id": 28560, "title": "The Bedroom", "date_start": 1889},
    ],
}


class TestHttpRecordSource:
    """Tests for the requests-backed record source."""

    def test_fetch_when_ok_then_sends_one_based_page_param(self):
        session = make_session(make_response(SAMPLE_BODY))
        source = HttpRecordSource(ENDPOINT, timeout_s=5.0, session=session)

        source.fetch(2)

        session.get.assert_called_once_with(ENDPOINT, params={"page": 2}, timeout=5.0)

    def test_fetch_when_ok_then_returns_records_and_total(self):
        source = HttpRecordSource(ENDPOINT, session=make_session(make_response(SAMPLE_BODY)))

        page = source.fetch(2)

        assert page.page_index == 2
        assert page.total_count == 125
        assert [r.id for r in page.records] == [27992, 28560]
        assert page.records[0].get("title") == "A Sunday on La Grande Jatte"

    def test_fetch_when_fields_configured_then_other_fields_dropped(self):
        source = HttpRecordSource(
            ENDPOINT,
            fields=["title", "place_of_origin"],
            session=make_session(make_response(SAMPLE_BODY)),
        )

        record = source.fetch(2).records[0]

        assert dict(record.fields) == {
            "title": "A Sunday on La Grande Jatte",
            "place_of_origin": None,
        }

    def test_fetch_when_http_error_then_raises_fetch_error(self):
        response = make_response(status_error=requests.HTTPError("503 Server Error"))
        source = HttpRecordSource(ENDPOINT, session=make_session(response))

        with pytest.raises(FetchError, match="page 3") as excinfo:
            source.fetch(3)
        assert excinfo.value.page_index == 3

    def test_fetch_when_connection_fails_then_raises_fetch_error(self):
        session = make_session(None)
        session.get.side_effect = requests.ConnectionError("unreachable")
        source = HttpRecordSource(ENDPOINT, session=session)

        with pytest.raises(FetchError):
            source.fetch(1)

    def test_fetch_when_body_not_json_then_raises_fetch_error(self):
        response = make_response(json_error=ValueError("Expecting value"))
        source = HttpRecordSource(ENDPOINT, session=make_session(response))

        with pytest.raises(FetchError, match="not JSON"):
            source.fetch(1)

    @pytest.mark.parametrize(
        "body",
        [
            {"data": []},
            {"pagination": {"total": -1}, "data": []},
            {"pagination": {"total": 3}, "data": [{"title": "no id"}]},
            ["not", "an", "object"],
        ],
    )
    def test_fetch_when_body_malformed_then_raises_fetch_error(self, body):
        source = HttpRecordSource(ENDPOINT, session=make_session(make_response(body)))

        with pytest.raises(FetchError, match="Malformed"):
            source.fetch(1)

    def test_fetch_when_page_zero_then_raises_value_error(self):
        source = HttpRecordSource(ENDPOINT, session=make_session(make_response(SAMPLE_BODY)))
        with pytest.raises(ValueError):
            source.fetch(0)


class TestPageStore:
    """Tests for the current-page store."""

    def test_store_when_nothing_committed_then_empty_defaults(self, fake_source):
        store = PageStore(fake_source, PAGE_SIZE)
        assert store.current is None
        assert store.records == ()
        assert store.total_count == 0
        assert store.page_index == 1
        assert store.page_count == 0

    def test_fetch_page_when_successful_then_current_unchanged(self, fake_source):
        store = PageStore(fake_source, PAGE_SIZE)
        result = store.fetch_page(2)
        assert result.page_index == 2
        assert store.current is None

    def test_load_page_when_successful_then_committed(self, fake_source):
        store = PageStore(fake_source, PAGE_SIZE)
        store.load_page(2)
        assert store.page_index == 2
        assert len(store.records) == PAGE_SIZE
        assert store.total_count == 40
        assert store.page_count == 4

    def test_load_page_when_fetch_fails_then_previous_page_kept(self, fake_source):
        store = PageStore(fake_source, PAGE_SIZE)
        store.load_page(1)
        before = store.current
        fake_source.fail_page(2)

        with pytest.raises(FetchError):
            store.load_page(2)

        assert store.current is before

    def test_fetch_page_when_source_returns_oversized_page_then_warns(self, caplog):
        source = FakeSource(total_count=40, page_size=20)
        store = PageStore(source, PAGE_SIZE)

        with caplog.at_level(logging.WARNING, logger="record_browser.store"):
            store.fetch_page(1)

        assert "configured page size" in caplog.text

    def test_clear_when_page_committed_then_forgotten(self, fake_source):
        store = PageStore(fake_source, PAGE_SIZE)
        store.load_page(1)
        store.clear()
        assert store.current is None
