"""
Tests for /api/initialize and /api/health.

The seed URL is never contacted: requests.Session.get is patched.
"""

import json
from unittest.mock import Mock, patch

import pytest
import requests


@pytest.fixture
def feed():
    return [
        {"id": 1, "title": "A", "price": 50, "description": "alpha", "category": "X",
         "sold": True, "dateOfSale": "2023-03-05T10:00:00+05:30"},
        {"id": 2, "title": "B", "price": 150, "description": "beta", "category": "Y",
         "sold": False, "dateOfSale": "2023-03-12T10:00:00+05:30"},
        {"id": 3, "title": "C", "price": 950, "category": "Y",
         "sold": False, "dateOfSale": "2022-07-01T10:00:00+05:30"},
    ]


def _ok(payload):
    response = Mock()
    response.status_code = 200
    response.content = json.dumps(payload).encode()
    response.json.return_value = payload
    return response


def test_initialize_loads_feed(client, store, feed):
    with patch.object(requests.Session, "get", return_value=_ok(feed)) as get:
        r = client.get("/api/initialize")

    assert r.status_code == 200
    assert r.get_json() == {"message": "Database initialized with seed data", "count": 3}
    assert store.count() == 3
    assert get.call_args.args[0] == "http://seed.test/product_transaction.json"


def test_initialize_accepts_post(client, store, feed):
    with patch.object(requests.Session, "get", return_value=_ok(feed)):
        assert client.post("/api/initialize").status_code == 200


def test_initialize_twice_gives_same_total(client, store, feed):
    with patch.object(requests.Session, "get", return_value=_ok(feed)):
        first = client.get("/api/initialize").get_json()["count"]
        second = client.get("/api/initialize").get_json()["count"]

    assert first == second == store.count() == 3


def test_initialize_then_query(client, feed):
    with patch.object(requests.Session, "get", return_value=_ok(feed)):
        client.get("/api/initialize")

    assert client.get("/api/statistics?month=March").get_json() == {
        "totalSaleAmount": 200,
        "totalSoldItems": 1,
        "totalNotSoldItems": 1,
    }


def test_initialize_upstream_failure_keeps_existing_data(client, store, make_row):
    store.replace_all([make_row("kept", 1, "2023-03-01")])

    with patch.object(requests.Session, "get", side_effect=requests.ConnectionError("down")), \
            patch("services.seed_service.time.sleep"):
        r = client.get("/api/initialize")

    assert r.status_code == 500
    assert r.get_json() == {"error": "Failed to initialize database"}
    assert [row.title for row in store.find()] == ["kept"]


def test_initialize_invalid_feed(client, store):
    with patch.object(requests.Session, "get", return_value=_ok({"not": "a list"})):
        r = client.get("/api/initialize")

    assert r.status_code == 500
    assert r.get_json() == {"error": "Failed to initialize database"}
    assert store.count() == 0


def test_health(client, store, make_row):
    store.replace_all([make_row("A", 1, "2023-03-01")])

    r = client.get("/api/health")

    assert r.status_code == 200
    assert r.get_json() == {"status": "healthy", "records": 1}


def test_health_reports_unavailable_store(tmp_path):
    from app import create_app
    from db.store import TransactionStore

    broken = TransactionStore.from_url(f"sqlite:///{tmp_path / 'empty.db'}")
    app = create_app({"TESTING": True, "AUTO_CREATE_TABLES": False,
                      "REQUEST_LOG_ENABLED": False}, store=broken)

    r = app.test_client().get("/api/health")

    assert r.status_code == 503
    assert r.get_json()["status"] == "unhealthy"
    broken.dispose()
