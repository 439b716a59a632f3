"""
Seed Dataset Service - fetch, validate and bulk-load product transactions

Seed source: a JSON array of products, e.g.
    https://s3.amazonaws.com/roxiler.com/product_transaction.json

    {
        "id": 1,
        "title": "Fjallraven  - Foldsack No. 1 Backpack, Fits 15 Laptops",
        "price": 329.85,
        "description": "Your perfect pack for everyday use ...",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "sold": false,
        "dateOfSale": "2021-11-27T20:29:54+05:30"
    }

Loading wipes the transactions table and inserts the validated records in
one store transaction; running it twice on the same feed gives the same
row count.

Usage:
    from services.seed_service import SeedClient, initialize_store

    client = SeedClient(url, timeout=30)
    count = initialize_store(store, client.fetch())
"""

import json
import logging
import time
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import requests
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from db.store import TransactionStore
from utils.normalize import coerce_to_date

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

MAX_RETRIES = 3
INITIAL_BACKOFF_SECONDS = 1.0
BACKOFF_MULTIPLIER = 2.0


# =============================================================================
# Errors
# =============================================================================

class SeedError(Exception):
    """Base exception for seed ingestion errors."""
    pass


class SeedFetchError(SeedError):
    """Upstream seed source could not be fetched."""
    pass


class SeedValidationError(SeedError):
    """Seed payload is not a list of valid product records."""
    pass


# =============================================================================
# Record schema
# =============================================================================

class SeedRecord(BaseModel):
    """One product from the seed feed, validated at the ingestion boundary."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        extra='ignore',  # upstream "id" and anything new are dropped
    )

    title: str = Field(min_length=1)
    description: Optional[str] = None
    price: float
    category: Optional[str] = None
    image: Optional[str] = None
    date_of_sale: date = Field(validation_alias=AliasChoices('dateOfSale', 'date_of_sale'))
    is_sold: bool = Field(default=False, validation_alias=AliasChoices('isSold', 'sold', 'is_sold'))

    @field_validator('date_of_sale', mode='before')
    @classmethod
    def parse_date_of_sale(cls, v):
        if v is None:
            raise ValueError('dateOfSale is required')
        return coerce_to_date(v)

    @field_validator('is_sold', mode='before')
    @classmethod
    def none_is_unsold(cls, v):
        return False if v is None else v

    def to_row(self) -> Dict[str, Any]:
        """Column dict for TransactionStore.replace_all()."""
        return self.model_dump()


def parse_seed_records(payload: Any) -> List[SeedRecord]:
    """
    Validate a decoded seed payload.

    Raises:
        SeedValidationError: payload is not a list, or any item is invalid
    """
    if not isinstance(payload, list):
        raise SeedValidationError(
            f"Seed payload must be a JSON array, got {type(payload).__name__}"
        )

    records = []
    for index, item in enumerate(payload):
        try:
            records.append(SeedRecord.model_validate(item))
        except PydanticValidationError as e:
            raise SeedValidationError(f"Invalid seed record at index {index}: {e}") from e
    return records


# =============================================================================
# Fetching
# =============================================================================

class SeedClient:
    """
    HTTP client for the seed feed.

    Features:
    - Request timeout
    - Retry with exponential backoff on connection errors, timeouts and 5xx
    - No retry on 4xx or malformed JSON
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 30,
        max_retries: int = MAX_RETRIES,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": "TransactionsDashboard/1.0 (seed loader)",
            "Accept": "application/json",
        })

    def fetch_json(self) -> Any:
        """
        GET the seed URL and decode its JSON body.

        Raises:
            SeedFetchError: If all attempts fail or the body is not JSON.
        """
        backoff = INITIAL_BACKOFF_SECONDS
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                start = time.time()
                response = self._session.get(self.url, timeout=self.timeout)
                duration = time.time() - start

                if response.status_code >= 500:
                    raise requests.HTTPError(
                        f"Seed source returned {response.status_code}", response=response
                    )
                if response.status_code != 200:
                    raise SeedFetchError(
                        f"Seed source returned {response.status_code} for {self.url}"
                    )

                logger.info(
                    "seed_fetch_success url=%s attempt=%d duration_s=%.2f bytes=%d",
                    self.url, attempt, duration, len(response.content),
                )
                try:
                    return response.json()
                except ValueError as e:
                    raise SeedFetchError(f"Seed source returned invalid JSON: {e}") from e

            except (requests.ConnectionError, requests.Timeout, requests.HTTPError) as e:
                last_error = e
                logger.warning(
                    "seed_fetch_retry url=%s attempt=%d/%d err=%s",
                    self.url, attempt, self.max_retries, str(e)[:200],
                )
                if attempt < self.max_retries:
                    time.sleep(backoff)
                    backoff *= BACKOFF_MULTIPLIER

        raise SeedFetchError(
            f"Failed to fetch seed data from {self.url} after {self.max_retries} attempts: {last_error}"
        )

    def fetch(self) -> List[SeedRecord]:
        """Fetch and validate the seed feed."""
        return parse_seed_records(self.fetch_json())


def load_seed_file(path: Union[str, Path]) -> List[SeedRecord]:
    """Read and validate a seed feed saved as a local JSON file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        raise SeedFetchError(f"Cannot read seed file {path}: {e}") from e
    return parse_seed_records(payload)


# =============================================================================
# Loading
# =============================================================================

def initialize_store(store: TransactionStore, records: Iterable[SeedRecord]) -> int:
    """
    Replace every stored transaction with `records`.

    Returns:
        Number of records inserted.
    """
    rows = [record.to_row() for record in records]
    count = store.replace_all(rows)
    logger.info("seed_loaded records=%d", count)
    return count
