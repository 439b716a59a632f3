"""
Flask Application Factory - Transactions Dashboard API

All analytics use SQL aggregation through an injected TransactionStore.
No module-level database handle: create_app() builds the store from config
(or receives one, e.g. from tests) and keeps it on app.extensions.

The API is public (no authentication).
"""

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config, engine_options_for
from db.store import TransactionStore

logger = logging.getLogger(__name__)


def _build_store(app: Flask) -> TransactionStore:
    store = TransactionStore.from_url(
        app.config['SQLALCHEMY_DATABASE_URI'],
        app.config.get('SQLALCHEMY_ENGINE_OPTIONS') or {},
        warmup=app.config.get('DB_WARMUP', False),
    )
    logger.info("transaction_store_created url=%s", store.engine.url.render_as_string(hide_password=True))
    return store


def create_app(
    config_overrides: Optional[Dict[str, Any]] = None,
    store: Optional[TransactionStore] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        config_overrides: Values applied on top of config.Config
        store: Pre-built record store; built from SQLALCHEMY_DATABASE_URI
               when omitted
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
        if ('SQLALCHEMY_DATABASE_URI' in config_overrides
                and 'SQLALCHEMY_ENGINE_OPTIONS' not in config_overrides):
            app.config['SQLALCHEMY_ENGINE_OPTIONS'] = engine_options_for(
                app.config['SQLALCHEMY_DATABASE_URI'])

    CORS(app,
         resources={r"/api/*": {"origins": "*"}},
         methods=["GET", "POST", "OPTIONS"],
         allow_headers=["Content-Type", "X-Request-ID"],
         expose_headers=["X-Request-ID"],
         supports_credentials=False,
         send_wildcard=True)

    # === API MIDDLEWARE ===
    from api.middleware import (
        setup_error_handlers,
        setup_request_id_middleware,
        setup_request_logging_middleware,
    )
    setup_request_id_middleware(app)
    setup_request_logging_middleware(app)
    setup_error_handlers(app)

    # === RECORD STORE ===
    from routes.analytics import STORE_EXTENSION_KEY, analytics_bp

    if store is None:
        store = _build_store(app)
    app.extensions[STORE_EXTENSION_KEY] = store

    if app.config.get('AUTO_CREATE_TABLES', True):
        store.create_tables()
        logger.info("database_tables_ready")

    # Register routes (PUBLIC - no authentication required)
    app.register_blueprint(analytics_bp, url_prefix='/api')

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "name": "Transactions Dashboard API",
            "status": "running",
            "endpoints": sorted(
                rule.rule for rule in app.url_map.iter_rules()
                if rule.rule.startswith('/api/')
            ),
        })

    return app


def run_app():
    """Main entry point for local development - starts Flask's dev server."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()

    count = app.extensions['transaction_store'].count()
    logger.info("Transactions in store: %d", count)
    if count == 0:
        logger.info("Store is empty. Run: GET /api/initialize or `python cli.py seed`")

    port = int(os.environ.get("PORT", 5000))
    app.run(debug=Config.DEBUG, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run_app()
