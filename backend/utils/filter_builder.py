"""
Filter builder utilities.

Provides a single source of truth for the month / search / pagination
filters shared by the listing endpoint and the three analytics endpoints.

    month filter  AND  (title ~ search OR description ~ search OR price-text ~ search)

Month matching compares the calendar month of date_of_sale, in any year.
Search is a case-insensitive literal substring match. Price takes part in
search as text: "329" finds a 329.85 item.
"""

import math
from typing import Any, List, Optional

from sqlalchemy import BigInteger, String, case, cast, extract, false, func, or_

from constants import DEFAULT_PAGE, DEFAULT_PER_PAGE
from models.transaction import Transaction
from utils.normalize import parse_month


def build_month_filter(month: Any, year: Optional[int] = None) -> List[Any]:
    """
    Conditions selecting records sold in `month` (any year unless `year`).

    A missing or unrecognised month yields a condition that matches nothing.
    """
    month_number = parse_month(month)
    if month_number is None:
        return [false()]

    conditions = [extract('month', Transaction.date_of_sale) == month_number]
    if year is not None:
        conditions.append(extract('year', Transaction.date_of_sale) == year)
    return conditions


def price_as_text():
    """
    Canonical text rendering of price used by free-text search.

    Whole-number prices render without a fractional part ("50", never
    "50.0"), other prices in their shortest decimal form ("329.85"). The
    whole-number branch goes through BIGINT so SQLite and PostgreSQL
    produce the same text.
    """
    whole = cast(Transaction.price, BigInteger)
    return case(
        (Transaction.price == whole, cast(whole, String)),
        else_=cast(Transaction.price, String),
    )


def build_search_filter(search: Optional[str]) -> List[Any]:
    """
    Conditions for free-text search; empty search adds nothing.

    Matches title, description or price-as-text, case-insensitively.
    Leading and trailing whitespace is trimmed, so " 50" searches for "50"
    and a blank search matches everything. LIKE wildcards in the input are
    escaped (autoescape) so "%" and "_" match literally.
    """
    if search is None:
        return []
    needle = search.strip().lower()
    if not needle:
        return []

    return [or_(
        func.lower(Transaction.title).contains(needle, autoescape=True),
        func.lower(Transaction.description).contains(needle, autoescape=True),
        func.lower(price_as_text()).contains(needle, autoescape=True),
    )]


def build_transaction_filters(
    month: Any,
    search: Optional[str] = None,
    year: Optional[int] = None,
) -> List[Any]:
    """
    Build the full condition list for the listing endpoint.

    Returns:
        List of SQLAlchemy conditions to be combined with and_().
    """
    return build_month_filter(month, year) + build_search_filter(search)


def page_offset(page: int, per_page: int) -> int:
    """skip = (page - 1) * per_page, for a 1-indexed page."""
    return (page - 1) * per_page


def total_pages(total: int, per_page: int) -> int:
    if per_page <= 0:
        return 0
    return math.ceil(total / per_page)


def clamp_pagination(
    page: Optional[int],
    per_page: Optional[int],
    *,
    default_per_page: int = DEFAULT_PER_PAGE,
    max_per_page: Optional[int] = None,
):
    """
    Normalize a (page, per_page) pair.

    page < 1 or None -> 1; per_page < 1 or None -> default_per_page;
    per_page above max_per_page is capped.
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if per_page is None or per_page < 1:
        per_page = default_per_page
    if max_per_page is not None and per_page > max_per_page:
        per_page = max_per_page
    return page, per_page
