"""
Admin and Health Endpoints

Endpoints:
- /initialize - Wipe and reload the transactions table from the seed feed
- /health - Health check
"""

import time

from flask import current_app, jsonify

from routes.analytics import analytics_bp, get_store
from routes.analytics._route_utils import (
    failure_response, log_error, log_success, route_logger,
)
from services.seed_service import SeedClient, initialize_store

logger = route_logger("admin")


@analytics_bp.route("/initialize", methods=["GET", "POST"])
def initialize():
    """
    Replace all transactions with the seed feed at SEED_DATA_URL.

    Idempotent for an unchanged feed. Any fetch, validation or store failure
    returns 500 and leaves the previous data in place.
    """
    start = time.perf_counter()
    url = current_app.config['SEED_DATA_URL']
    try:
        client = SeedClient(url, timeout=current_app.config.get('SEED_TIMEOUT_SECONDS', 30))
        count = initialize_store(get_store(), client.fetch())
    except Exception as e:
        log_error(logger, "/api/initialize", start, e, {"url": url})
        return failure_response("Failed to initialize database")

    log_success(logger, "/api/initialize", start, {"records": count})
    return jsonify({
        "message": "Database initialized with seed data",
        "count": count,
    })


@analytics_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    try:
        records = get_store().count()
    except Exception as e:
        logger.exception("health_check_failed err=%s", e)
        return jsonify({"status": "unhealthy", "error": "Database unavailable"}), 503

    return jsonify({"status": "healthy", "records": records})
