"""
Tests for /api/statistics, /api/bar-chart, /api/pie-chart, /api/combined-data.
"""

import pytest

from constants import PRICE_RANGE_LABELS


@pytest.fixture
def example(store, example_rows):
    store.replace_all(example_rows)
    return store


def test_statistics_example(client, example):
    r = client.get("/api/statistics?month=March")

    assert r.status_code == 200
    assert r.get_json() == {
        "totalSaleAmount": 200,
        "totalSoldItems": 1,
        "totalNotSoldItems": 1,
    }


def test_statistics_empty_month_is_all_zero(client, example):
    assert client.get("/api/statistics?month=August").get_json() == {
        "totalSaleAmount": 0,
        "totalSoldItems": 0,
        "totalNotSoldItems": 0,
    }


def test_statistics_without_month(client, example):
    r = client.get("/api/statistics")
    assert r.status_code == 200
    assert r.get_json()["totalSaleAmount"] == 0


def test_bar_chart_example(client, example):
    data = client.get("/api/bar-chart?month=March").get_json()

    assert [b["range"] for b in data] == PRICE_RANGE_LABELS
    counts = {b["range"]: b["count"] for b in data}
    assert counts.pop("0-100") == 1
    assert counts.pop("101-200") == 1
    assert set(counts.values()) == {0}


def test_bar_chart_on_empty_store_still_has_ten_entries(client):
    data = client.get("/api/bar-chart?month=March").get_json()
    assert len(data) == 10
    assert sum(b["count"] for b in data) == 0


def test_pie_chart(client, store, sample_rows):
    store.replace_all(sample_rows)
    data = client.get("/api/pie-chart?month=March").get_json()

    assert sorted(data, key=lambda i: (i["_id"] is not None, i["_id"] or "")) == [
        {"_id": None, "count": 1},
        {"_id": "electronics", "count": 2},
        {"_id": "men's clothing", "count": 1},
    ]


def test_combined_data(client, example):
    r = client.get("/api/combined-data?month=March")

    assert r.status_code == 200
    data = r.get_json()
    assert data["statistics"] == {
        "totalSaleAmount": 200,
        "totalSoldItems": 1,
        "totalNotSoldItems": 1,
    }
    assert len(data["barChart"]) == 10
    assert {item["_id"] for item in data["pieChart"]} == {"X", "Y"}


def test_combined_data_fails_whole_when_one_part_fails(client, example, monkeypatch):
    from services import analytics_service

    def boom(*args, **kwargs):
        raise RuntimeError("histogram failed")

    monkeypatch.setattr(analytics_service, "get_price_histogram", boom)

    r = client.get("/api/combined-data?month=March")

    assert r.status_code == 500
    assert r.get_json() == {"error": "Failed to fetch combined data"}


@pytest.mark.parametrize("path,message", [
    ("/api/statistics", "Failed to fetch statistics"),
    ("/api/bar-chart", "Failed to fetch bar chart data"),
    ("/api/pie-chart", "Failed to fetch pie chart data"),
    ("/api/combined-data", "Failed to fetch combined data"),
])
def test_store_failure_is_generic_500(tmp_path, path, message):
    from app import create_app
    from db.store import TransactionStore

    broken = TransactionStore.from_url(f"sqlite:///{tmp_path / 'empty.db'}")
    app = create_app({"TESTING": True, "AUTO_CREATE_TABLES": False,
                      "REQUEST_LOG_ENABLED": False}, store=broken)

    r = app.test_client().get(f"{path}?month=March")

    assert r.status_code == 500
    assert r.get_json() == {"error": message}
    broken.dispose()
