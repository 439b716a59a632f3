"""
@api_contract decorator - normalizes query params before the handler runs.

Usage:
    @analytics_bp.route("/statistics", methods=["GET"])
    @api_contract(MonthParams)
    def statistics():
        params = g.normalized_params  # MonthParams instance
        ...
"""

import functools
import logging
from typing import Callable, Type

from flask import g, request

from .base import BaseParamsModel

logger = logging.getLogger('api.contracts')


def api_contract(params_model: Type[BaseParamsModel]):
    """
    Decorator that parses request.args into `params_model`.

    The validated (frozen) model is exposed as g.normalized_params.
    """
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            raw_params = request.args.to_dict(flat=True)
            g.normalized_params = params_model.model_validate(raw_params)
            logger.debug(
                "params_normalized endpoint=%s params=%s",
                request.path, g.normalized_params.model_dump(),
            )
            return fn(*args, **kwargs)
        return wrapper
    return decorator
