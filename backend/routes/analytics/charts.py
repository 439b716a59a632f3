"""
Month-scoped chart endpoints

Endpoints:
- /statistics - Total sale amount, sold and unsold item counts
- /bar-chart - Item count per price range (always 10 ranges)
- /pie-chart - Item count per category
- /combined-data - All three of the above in one response
"""

import time

from flask import current_app, g, jsonify

from api.contracts import MonthParams, api_contract
from routes.analytics import analytics_bp, get_store
from routes.analytics._route_utils import (
    failure_response, log_error, log_success, route_logger,
)
from services.analytics_service import (
    get_category_breakdown,
    get_combined_data,
    get_price_histogram,
    get_statistics,
)

logger = route_logger("charts")


@analytics_bp.route("/statistics", methods=["GET"])
@api_contract(MonthParams)
def statistics():
    """
    Sales statistics for a month.

    Example:
        GET /api/statistics?month=March
        -> {"totalSaleAmount": 200.0, "totalSoldItems": 1, "totalNotSoldItems": 1}
    """
    start = time.perf_counter()
    params: MonthParams = g.normalized_params
    try:
        result = get_statistics(get_store(), params.month, params.year)
    except Exception as e:
        log_error(logger, "/api/statistics", start, e, {"month": params.month})
        return failure_response("Failed to fetch statistics")

    log_success(logger, "/api/statistics", start, {"month": params.month})
    return jsonify(result)


@analytics_bp.route("/bar-chart", methods=["GET"])
@api_contract(MonthParams)
def bar_chart():
    """
    Price-range histogram for a month.

    Returns a list of {range, count} for 0-100, 101-200, ..., 901-above.
    """
    start = time.perf_counter()
    params: MonthParams = g.normalized_params
    try:
        result = get_price_histogram(get_store(), params.month, params.year)
    except Exception as e:
        log_error(logger, "/api/bar-chart", start, e, {"month": params.month})
        return failure_response("Failed to fetch bar chart data")

    log_success(logger, "/api/bar-chart", start, {"month": params.month})
    return jsonify(result)


@analytics_bp.route("/pie-chart", methods=["GET"])
@api_contract(MonthParams)
def pie_chart():
    """
    Category breakdown for a month.

    Returns a list of {_id: category, count}; `_id` is null for records
    without a category. Order is not guaranteed.
    """
    start = time.perf_counter()
    params: MonthParams = g.normalized_params
    try:
        result = get_category_breakdown(get_store(), params.month, params.year)
    except Exception as e:
        log_error(logger, "/api/pie-chart", start, e, {"month": params.month})
        return failure_response("Failed to fetch pie chart data")

    log_success(logger, "/api/pie-chart", start, {
        "month": params.month,
        "categories": len(result),
    })
    return jsonify(result)


@analytics_bp.route("/combined-data", methods=["GET"])
@api_contract(MonthParams)
def combined_data():
    """
    Statistics, bar chart and pie chart for a month in one response.

    Fails as a whole if any of the three parts fails.

    Example:
        GET /api/combined-data?month=March
        -> {"statistics": {...}, "barChart": [...], "pieChart": [...]}
    """
    start = time.perf_counter()
    params: MonthParams = g.normalized_params
    try:
        result = get_combined_data(
            get_store(),
            params.month,
            params.year,
            max_workers=current_app.config.get('COMBINED_MAX_WORKERS', 3),
        )
    except Exception as e:
        log_error(logger, "/api/combined-data", start, e, {"month": params.month})
        return failure_response("Failed to fetch combined data")

    log_success(logger, "/api/combined-data", start, {"month": params.month})
    return jsonify(result)
