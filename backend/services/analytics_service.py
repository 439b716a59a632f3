"""
Month-scoped analytics over the record store.

Endpoints served:
- get_statistics          -> /api/statistics
- get_price_histogram     -> /api/bar-chart
- get_category_breakdown  -> /api/pie-chart
- get_combined_data       -> /api/combined-data (runs the three above)

All analytics use SQL aggregation; rows are never pulled into Python to be
counted.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, case, func

from constants import PRICE_RANGES
from db.store import TransactionStore
from models.transaction import Transaction
from utils.filter_builder import build_month_filter

logger = logging.getLogger(__name__)


def get_statistics(
    store: TransactionStore,
    month: Any,
    year: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Sale amount and sold/unsold counts for a month.

    totalSaleAmount sums price over every month-matching record (sold or
    not) and is 0, never None, when nothing matches.
    """
    conditions = build_month_filter(month, year)
    columns = [
        func.sum(Transaction.price).label('total_sale_amount'),
        func.sum(case((Transaction.is_sold.is_(True), 1), else_=0)).label('sold'),
        func.sum(case((Transaction.is_sold.is_(True), 0), else_=1)).label('not_sold'),
    ]
    row = store.aggregate(columns, conditions)[0]

    return {
        'totalSaleAmount': round(float(row.total_sale_amount or 0), 2),
        'totalSoldItems': int(row.sold or 0),
        'totalNotSoldItems': int(row.not_sold or 0),
    }


def price_bucket_conditions() -> List[Any]:
    """
    One price condition per PRICE_RANGES entry, in the same order.

    First bucket is [0, 100]; each later bucket is (previous upper, upper],
    the last one unbounded. Negative prices fall in no bucket.
    """
    conditions = []
    previous_upper = None
    for price_range in PRICE_RANGES:
        if previous_upper is None:
            condition = Transaction.price >= price_range.lower
        else:
            condition = Transaction.price > previous_upper
        if price_range.upper is not None:
            condition = and_(condition, Transaction.price <= price_range.upper)
        conditions.append(condition)
        previous_upper = price_range.upper
    return conditions


def get_price_histogram(
    store: TransactionStore,
    month: Any,
    year: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Count of month-matching records per price range.

    Always returns all 10 ranges in PRICE_RANGES order, zero-filled.
    """
    conditions = build_month_filter(month, year)
    # One row of conditional counts; no GROUP BY, so empty buckets still appear
    columns = [
        func.sum(case((bucket_condition, 1), else_=0)).label(f'bucket_{index}')
        for index, bucket_condition in enumerate(price_bucket_conditions())
    ]
    row = store.aggregate(columns, conditions)[0]

    return [
        {'range': price_range.label, 'count': int(row[index] or 0)}
        for index, price_range in enumerate(PRICE_RANGES)
    ]


def get_category_breakdown(
    store: TransactionStore,
    month: Any,
    year: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Count of month-matching records per category.

    Records without a category form their own group with `_id: None`.
    Output order is whatever the database's GROUP BY yields and must not be
    relied on.
    """
    conditions = build_month_filter(month, year)
    rows = store.aggregate(
        [Transaction.category, func.count(Transaction.id).label('count')],
        conditions,
        group_by=[Transaction.category],
    )
    return [{'_id': row.category, 'count': int(row.count)} for row in rows]


def get_combined_data(
    store: TransactionStore,
    month: Any,
    year: Optional[int] = None,
    *,
    max_workers: int = 3,
) -> Dict[str, Any]:
    """
    Statistics, bar chart and pie chart for one month in a single payload.

    The three reads run concurrently and are joined before the result is
    assembled. If any of them raises, that exception propagates and no
    partial payload is returned.
    """
    with ThreadPoolExecutor(max_workers=max(1, max_workers),
                            thread_name_prefix='combined-data') as executor:
        statistics = executor.submit(get_statistics, store, month, year)
        bar_chart = executor.submit(get_price_histogram, store, month, year)
        pie_chart = executor.submit(get_category_breakdown, store, month, year)

        return {
            'statistics': statistics.result(),
            'barChart': bar_chart.result(),
            'pieChart': pie_chart.result(),
        }
