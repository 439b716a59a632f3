"""
Transaction listing service.

Paginated, month-scoped, searchable view over the record store. The total
and the page slice are two independent reads.
"""

import logging
from typing import Any, Dict, Optional

from db.store import TransactionStore
from utils.filter_builder import build_transaction_filters, page_offset, total_pages

logger = logging.getLogger(__name__)


def list_transactions(
    store: TransactionStore,
    *,
    month: Any,
    search: Optional[str] = '',
    page: int = 1,
    per_page: int = 10,
    year: Optional[int] = None,
) -> Dict[str, Any]:
    """
    List transactions for a month, filtered by free-text search.

    Args:
        store: Record store handle
        month: Month token ('March', 'mar', 3); unrecognised matches nothing
        search: Substring matched against title, description and price text
        page: 1-indexed page number (already clamped by the caller)
        per_page: Page size (already clamped by the caller)
        year: Optional year narrowing

    Returns:
        {total, transactions, page, perPage, totalPages}
    """
    conditions = build_transaction_filters(month, search, year)

    total = store.count(conditions)
    skip = page_offset(page, per_page)
    # Past the end: no slice query; skip may exceed the database integer range
    rows = store.find(conditions, skip=skip, limit=per_page) if skip < total else []

    logger.debug(
        "list_transactions month=%s search=%r page=%d per_page=%d total=%d returned=%d",
        month, search, page, per_page, total, len(rows),
    )

    return {
        'total': total,
        'transactions': [row.to_dict() for row in rows],
        'page': page,
        'perPage': per_page,
        'totalPages': total_pages(total, per_page),
    }
