"""
Tests for the seed feed client and loader.

These tests use mocking to avoid hitting the real seed URL.
"""

import json
from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests

from services.seed_service import (
    SeedClient,
    SeedFetchError,
    SeedRecord,
    SeedValidationError,
    initialize_store,
    load_seed_file,
    parse_seed_records,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def seed_payload():
    """Two products in the upstream feed format."""
    return [
        {
            "id": 1,
            "title": "Fjallraven  - Foldsack No. 1 Backpack, Fits 15 Laptops",
            "price": 329.85,
            "description": "Your perfect pack for everyday use and walks in the forest.",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
            "sold": False,
            "dateOfSale": "2021-11-27T20:29:54+05:30",
        },
        {
            "id": 2,
            "title": "Mens Casual Premium Slim Fit T-Shirts ",
            "price": 44.6,
            "description": "Slim-fitting style.",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
            "sold": True,
            "dateOfSale": "2021-10-27T20:29:54+05:30",
        },
    ]


def _response(status_code, payload=None):
    response = Mock()
    response.status_code = status_code
    response.content = json.dumps(payload).encode() if payload is not None else b""
    response.json.return_value = payload
    return response


@pytest.fixture
def no_sleep():
    with patch("services.seed_service.time.sleep") as sleep:
        yield sleep


# =============================================================================
# SeedRecord
# =============================================================================

class TestSeedRecord:

    def test_upstream_fields_map_to_columns(self, seed_payload):
        record = SeedRecord.model_validate(seed_payload[1])

        assert record.to_row() == {
            "title": "Mens Casual Premium Slim Fit T-Shirts",
            "description": "Slim-fitting style.",
            "price": 44.6,
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
            "date_of_sale": date(2021, 10, 27),
            "is_sold": True,
        }

    def test_is_sold_alias_and_default(self):
        base = {"title": "A", "price": 1, "dateOfSale": "2023-03-05"}

        assert SeedRecord.model_validate({**base, "isSold": True}).is_sold is True
        assert SeedRecord.model_validate(base).is_sold is False
        assert SeedRecord.model_validate({**base, "sold": None}).is_sold is False

    @pytest.mark.parametrize("missing", ["title", "price", "dateOfSale"])
    def test_required_fields(self, missing):
        item = {"title": "A", "price": 1, "dateOfSale": "2023-03-05"}
        del item[missing]

        with pytest.raises(SeedValidationError):
            parse_seed_records([item])


def test_parse_rejects_non_list():
    with pytest.raises(SeedValidationError, match="JSON array"):
        parse_seed_records({"products": []})


def test_parse_reports_bad_index():
    items = [
        {"title": "A", "price": 1, "dateOfSale": "2023-03-05"},
        {"title": "B", "price": "free", "dateOfSale": "2023-03-05"},
    ]
    with pytest.raises(SeedValidationError, match="index 1"):
        parse_seed_records(items)


def test_parse_rejects_bad_date():
    with pytest.raises(SeedValidationError):
        parse_seed_records([{"title": "A", "price": 1, "dateOfSale": "someday"}])


# =============================================================================
# SeedClient
# =============================================================================

class TestSeedClient:

    def test_fetch_success(self, seed_payload):
        session = Mock()
        session.get.return_value = _response(200, seed_payload)

        client = SeedClient("http://seed.test/feed.json", timeout=7, session=session)
        records = client.fetch()

        assert [r.title for r in records] == [
            "Fjallraven  - Foldsack No. 1 Backpack, Fits 15 Laptops",
            "Mens Casual Premium Slim Fit T-Shirts",
        ]
        session.get.assert_called_once_with("http://seed.test/feed.json", timeout=7)

    def test_retries_server_errors_then_succeeds(self, seed_payload, no_sleep):
        session = Mock()
        session.get.side_effect = [_response(503), _response(200, seed_payload)]

        records = SeedClient("http://seed.test/feed.json", session=session).fetch()

        assert len(records) == 2
        assert session.get.call_count == 2
        no_sleep.assert_called_once()

    def test_retries_connection_errors_then_gives_up(self, no_sleep):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")

        client = SeedClient("http://seed.test/feed.json", session=session, max_retries=3)
        with pytest.raises(SeedFetchError, match="after 3 attempts"):
            client.fetch()

        assert session.get.call_count == 3
        assert no_sleep.call_count == 2

    def test_client_error_is_not_retried(self, no_sleep):
        session = Mock()
        session.get.return_value = _response(404)

        with pytest.raises(SeedFetchError, match="404"):
            SeedClient("http://seed.test/feed.json", session=session).fetch()

        assert session.get.call_count == 1
        no_sleep.assert_not_called()

    def test_invalid_json(self):
        response = _response(200)
        response.json.side_effect = ValueError("Expecting value")
        session = Mock()
        session.get.return_value = response

        with pytest.raises(SeedFetchError, match="invalid JSON"):
            SeedClient("http://seed.test/feed.json", session=session).fetch_json()


# =============================================================================
# Loading
# =============================================================================

def test_load_seed_file(tmp_path, seed_payload):
    path = tmp_path / "feed.json"
    path.write_text(json.dumps(seed_payload), encoding="utf-8")

    assert len(load_seed_file(path)) == 2


def test_load_seed_file_missing(tmp_path):
    with pytest.raises(SeedFetchError):
        load_seed_file(tmp_path / "nope.json")


def test_initialize_store_is_idempotent(store, seed_payload):
    records = parse_seed_records(seed_payload)

    assert initialize_store(store, records) == 2
    assert initialize_store(store, records) == 2
    assert store.count() == 2
