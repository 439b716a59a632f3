"""
Pydantic models for /api/* query params.

Covers:
- /transactions            -> TransactionListParams
- /statistics, /bar-chart,
  /pie-chart, /combined-data -> MonthParams
"""

from typing import Optional

from pydantic import Field, field_validator

from constants import DEFAULT_PAGE, DEFAULT_PER_PAGE
from utils.normalize import parse_month, to_int_or_default

from .base import BaseParamsModel


class MonthParams(BaseParamsModel):
    """Month scope shared by every read endpoint."""

    # Resolved month number; None when missing/unrecognised
    month: Optional[int] = None
    # Optional narrowing to a single year
    year: Optional[int] = None

    @field_validator('month', mode='before')
    @classmethod
    def resolve_month(cls, v):
        return parse_month(v)

    @field_validator('year', mode='before')
    @classmethod
    def lenient_year(cls, v):
        year = to_int_or_default(v, None)
        if year is None or not 1 <= year <= 9999:
            return None
        return year


class TransactionListParams(MonthParams):
    """Listing params: month + free-text search + 1-indexed pagination."""

    search: str = ''
    page: int = DEFAULT_PAGE
    per_page: int = Field(default=DEFAULT_PER_PAGE, alias='perPage')

    @field_validator('search', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return '' if v is None else str(v)

    @field_validator('page', mode='before')
    @classmethod
    def lenient_page(cls, v):
        return to_int_or_default(v, DEFAULT_PAGE)

    @field_validator('per_page', mode='before')
    @classmethod
    def lenient_per_page(cls, v):
        return to_int_or_default(v, DEFAULT_PER_PAGE)
