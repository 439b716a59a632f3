"""
Analytics API Routes - split into domain-specific modules

This package organizes the /api endpoints into logical domains:
- transactions.py: Paginated, searchable transaction listing
- charts.py: Statistics, bar chart, pie chart and combined data
- admin.py: Dataset initialization and health

All modules share the same blueprint (analytics_bp) registered at /api.
"""

from flask import Blueprint, current_app

from db.store import TransactionStore

# Create the shared blueprint
analytics_bp = Blueprint('analytics', __name__)

STORE_EXTENSION_KEY = 'transaction_store'


def get_store() -> TransactionStore:
    """Return the TransactionStore injected into the current app."""
    return current_app.extensions[STORE_EXTENSION_KEY]


# Import all route modules to register their routes with the blueprint
from routes.analytics import transactions  # noqa: E402,F401
from routes.analytics import charts  # noqa: E402,F401
from routes.analytics import admin  # noqa: E402,F401
