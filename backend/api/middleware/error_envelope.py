"""
Error envelope middleware - Standardize error responses that escape routes.

Routes catch their own failures and answer {"error": "<message>"} with 500.
Everything else (unknown path, wrong method, uncaught exception) gets the
same top-level "error" string plus a code and the request ID:
{
    "error": "The requested URL was not found on the server. ...",
    "code": "NOT_FOUND",
    "requestId": "uuid"
}
"""

import logging
from flask import Flask, jsonify, g
from werkzeug.exceptions import HTTPException


logger = logging.getLogger('api.middleware.error')


def _envelope(message: str, code: str, status_code: int):
    request_id = getattr(g, 'request_id', None)
    response = jsonify({
        "error": message,
        "code": code,
        "requestId": request_id,
    })
    if request_id:
        response.headers['X-Request-ID'] = request_id
    return response, status_code


def setup_error_handlers(app: Flask) -> None:
    """
    Set up standardized error handlers on Flask app.

    Handles:
    - HTTP exceptions (404, 405, etc.) - status code preserved
    - Unhandled Python exceptions - 500 INTERNAL_ERROR
    """

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        # "Not Found" -> "NOT_FOUND"
        code = error.name.upper().replace(' ', '_')
        return _envelope(error.description, code, error.code)

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        logger.exception(
            "Unhandled error: %s", error,
            extra={
                "event": "unhandled_error",
                "request_id": getattr(g, 'request_id', None),
                "error_type": type(error).__name__,
            }
        )
        return _envelope("An unexpected error occurred", "INTERNAL_ERROR", 500)
