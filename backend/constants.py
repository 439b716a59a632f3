"""
Centralized Constants - SINGLE SOURCE OF TRUTH

Month tokens, price-range buckets and pagination defaults used by the
query builder and the analytics services. Import from here; do not
redefine these lists elsewhere.
"""

from typing import List, NamedTuple, Optional

# =============================================================================
# MONTH TOKENS
# =============================================================================

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]

# Lowercase name/abbreviation -> month number (1-12)
MONTH_MAP = {}
for _number, _name in enumerate(MONTH_NAMES, start=1):
    MONTH_MAP[_name.lower()] = _number
    MONTH_MAP[_name[:3].lower()] = _number
MONTH_MAP['sept'] = 9


# =============================================================================
# PRICE RANGE BUCKETS (bar chart)
# =============================================================================

class PriceRange(NamedTuple):
    """
    One histogram bucket.

    `upper` is inclusive; None means unbounded. The lower edge of a bucket is
    the previous bucket's `upper` (exclusive), or `lower` (inclusive) for the
    first bucket, so fractional prices such as 100.5 are never dropped.
    """
    label: str
    lower: float
    upper: Optional[float]


PRICE_RANGES: List[PriceRange] = [
    PriceRange('0-100', 0, 100),
    PriceRange('101-200', 101, 200),
    PriceRange('201-300', 201, 300),
    PriceRange('301-400', 301, 400),
    PriceRange('401-500', 401, 500),
    PriceRange('501-600', 501, 600),
    PriceRange('601-700', 601, 700),
    PriceRange('701-800', 701, 800),
    PriceRange('801-900', 801, 900),
    PriceRange('901-above', 901, None),
]

PRICE_RANGE_LABELS = [r.label for r in PRICE_RANGES]


# =============================================================================
# PAGINATION
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
