"""
Shared route utilities for analytics endpoints.

Goals:
- Structured logger usage for timing and errors
- Keep endpoint handlers small and consistent
"""

import time
import logging
from typing import Any, Dict, Optional

from flask import g, jsonify


def route_logger(name: str) -> logging.Logger:
    """Return namespaced logger for analytics routes."""
    return logging.getLogger(f"analytics.{name}")


def elapsed_ms(start_time: float) -> int:
    """Return elapsed milliseconds since a time.perf_counter() start."""
    return int((time.perf_counter() - start_time) * 1000)


def log_success(
    logger: logging.Logger,
    route: str,
    start_time: float,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    payload = {"route": route, "elapsed_ms": elapsed_ms(start_time)}
    if details:
        payload.update(details)
    logger.info("route_success %s", payload)


def log_error(
    logger: logging.Logger,
    route: str,
    start_time: float,
    err: Exception,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    payload = {
        "route": route,
        "elapsed_ms": elapsed_ms(start_time),
        "request_id": getattr(g, "request_id", None),
    }
    if details:
        payload.update(details)
    logger.exception("route_error %s err=%s", payload, err)


def failure_response(message: str, status_code: int = 500):
    """Generic failure body used by every endpoint: {"error": message}."""
    return jsonify({"error": message}), status_code
