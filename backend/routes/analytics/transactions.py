"""
Transaction Listing Endpoint

Endpoints:
- /transactions - Month-scoped, searchable, paginated transaction list
"""

import time

from flask import current_app, g, jsonify

from api.contracts import TransactionListParams, api_contract
from routes.analytics import analytics_bp, get_store
from routes.analytics._route_utils import (
    failure_response, log_error, log_success, route_logger,
)
from services.transaction_service import list_transactions
from utils.filter_builder import clamp_pagination

logger = route_logger("transactions")


@analytics_bp.route("/transactions", methods=["GET"])
@api_contract(TransactionListParams)
def get_transactions():
    """
    List transactions sold in a month, optionally filtered by search text.

    Query params:
        - month: Month name ('March'), abbreviation ('mar') or number ('3').
                 Missing or unrecognised -> empty result, not an error.
        - year: Optional year narrowing
        - search: Case-insensitive substring of title, description or price.
                  Surrounding whitespace is trimmed; blank matches everything.
        - page: 1-indexed page (default 1)
        - perPage: Page size (default 10, capped at MAX_PER_PAGE)

    Example:
        GET /api/transactions?month=March&search=shirt&page=2&perPage=10
    """
    start = time.perf_counter()
    params: TransactionListParams = g.normalized_params

    page, per_page = clamp_pagination(
        params.page,
        params.per_page,
        default_per_page=current_app.config.get('DEFAULT_PER_PAGE', 10),
        max_per_page=current_app.config.get('MAX_PER_PAGE'),
    )

    try:
        result = list_transactions(
            get_store(),
            month=params.month,
            search=params.search,
            page=page,
            per_page=per_page,
            year=params.year,
        )
    except Exception as e:
        log_error(logger, "/api/transactions", start, e, {"month": params.month})
        return failure_response("Failed to fetch transactions")

    log_success(logger, "/api/transactions", start, {
        "month": params.month,
        "total": result["total"],
        "returned": len(result["transactions"]),
    })
    return jsonify(result)
