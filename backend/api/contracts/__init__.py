"""
Contract enforcement package.

Provides the param models and the @api_contract decorator.
"""

from .base import BaseParamsModel
from .params import MonthParams, TransactionListParams
from .wrapper import api_contract

__all__ = [
    'BaseParamsModel',
    'MonthParams',
    'TransactionListParams',
    'api_contract',
]
