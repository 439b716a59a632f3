"""
Root pytest configuration for backend tests.

Provides:
- Shared fixtures (store, app, client)
- Seed row builders for small, hand-checked datasets
"""

import sys
from datetime import date
from pathlib import Path

# Add backend directory to Python path so imports like
# `from db.store import ...` and `from utils.normalize import ...` work
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest


SEED_URL = "http://seed.test/product_transaction.json"


def make_row(title, price, date_of_sale, *, is_sold=False, category=None,
             description=None, image=None):
    """Column dict accepted by TransactionStore.replace_all()."""
    if isinstance(date_of_sale, str):
        date_of_sale = date.fromisoformat(date_of_sale)
    return {
        "title": title,
        "description": description,
        "price": price,
        "category": category,
        "image": image,
        "date_of_sale": date_of_sale,
        "is_sold": is_sold,
    }


@pytest.fixture(name="make_row")
def make_row_fixture():
    """Expose make_row() to tests without importing conftest."""
    return make_row


@pytest.fixture
def example_rows():
    """Two March records with hand-computed statistics (200 / 1 sold / 1 unsold)."""
    return [
        make_row("A", 50, "2023-03-05", is_sold=True, category="X"),
        make_row("B", 150, "2023-03-12", is_sold=False, category="Y"),
    ]


@pytest.fixture
def sample_rows():
    """Mixed months, years, categories and prices."""
    return [
        make_row("Cotton Shirt", 329.85, "2022-03-20", category="men's clothing",
                 description="Slim fit, breathable"),
        make_row("Gold Ring", 999.0, "2021-11-27", is_sold=True, category="jewelery",
                 description="18k gold"),
        make_row("Laptop Bag", 100.5, "2023-03-02", is_sold=True,
                 description="Fits 15 inch laptops"),
        make_row("Phone Case", 0, "2023-03-15", category="electronics"),
        make_row("Wireless Mouse", 25.99, "2023-03-28", is_sold=True, category="electronics",
                 description="Silent clicks"),
        make_row("Winter Jacket", 650, "2023-01-09", category="women's clothing"),
    ]


@pytest.fixture
def store(tmp_path):
    """Empty TransactionStore on a throwaway SQLite file."""
    from db.store import TransactionStore

    store = TransactionStore.from_url(f"sqlite:///{tmp_path / 'transactions.db'}")
    store.create_tables()
    yield store
    store.dispose()


@pytest.fixture
def app(store):
    """Create test Flask application with the injected store."""
    from app import create_app

    app = create_app(
        {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'SEED_DATA_URL': SEED_URL,
            'SEED_TIMEOUT_SECONDS': 5,
            'REQUEST_LOG_ENABLED': False,
        },
        store=store,
    )
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
