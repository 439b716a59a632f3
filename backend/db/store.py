"""
TransactionStore - the record store handle.

One explicitly constructed object owns the engine and the session factory.
The app factory builds it (or receives one) and stores it on
app.extensions; routes fetch it with get_store() and pass it to services.
Nothing imports a module-level connection.

Every public method opens its own short-lived session, so one store can be
shared by the worker threads of /api/combined-data. Two calls (e.g. count
then find) are NOT in one transaction; readers may see different snapshots.

Usage:
    store = TransactionStore.from_url("sqlite:///local.db")
    store.create_tables()
    store.replace_all([{"title": "A", "price": 50.0, ...}])

    total = store.count([Transaction.is_sold.is_(True)])
    rows = store.find(conditions, skip=0, limit=10)
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, true
from sqlalchemy.engine import Engine, Row
from sqlalchemy.orm import Session, sessionmaker

from db.engine import build_engine
from models.database import Base
from models.transaction import Transaction

logger = logging.getLogger(__name__)


def _where(conditions: Optional[Sequence[Any]]):
    """Combine a list of conditions with AND; empty means match-all."""
    if not conditions:
        return true()
    return and_(*conditions)


class TransactionStore:
    """Persistence handle for Transaction records."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(
        cls,
        database_url: str,
        engine_options: Optional[Dict[str, Any]] = None,
        *,
        kind: str = "web",
        warmup: bool = False,
    ) -> "TransactionStore":
        return cls(build_engine(database_url, engine_options, kind=kind, warmup=warmup))

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # =========================================================================
    # Schema
    # =========================================================================

    def create_tables(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        Base.metadata.drop_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("transaction_store_disposed")

    # =========================================================================
    # Reads
    # =========================================================================

    def count(self, conditions: Optional[Sequence[Any]] = None) -> int:
        """Count records matching all conditions."""
        stmt = select(func.count(Transaction.id)).where(_where(conditions))
        with self.session_scope() as session:
            return session.execute(stmt).scalar_one()

    def find(
        self,
        conditions: Optional[Sequence[Any]] = None,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """
        Return matching records in insertion (id) order.

        skip/limit slice the ordered result; limit=None returns the rest.
        """
        stmt = (
            select(Transaction)
            .where(_where(conditions))
            .order_by(Transaction.id)
            .offset(max(skip, 0))
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.session_scope() as session:
            return list(session.execute(stmt).scalars().all())

    def aggregate(
        self,
        columns: Sequence[Any],
        conditions: Optional[Sequence[Any]] = None,
        *,
        group_by: Optional[Sequence[Any]] = None,
    ) -> List[Row]:
        """
        Run an aggregate SELECT over matching records.

        Args:
            columns: Labelled SQL expressions (func.sum(...).label('x'), ...)
            conditions: Filter conditions combined with AND
            group_by: Optional grouping expressions

        Returns:
            Result rows. Without group_by there is exactly one row.
        """
        stmt = select(*columns).select_from(Transaction).where(_where(conditions))
        if group_by:
            stmt = stmt.group_by(*group_by)
        with self.session_scope() as session:
            return list(session.execute(stmt).all())

    # =========================================================================
    # Writes
    # =========================================================================

    def replace_all(self, records: Iterable[Dict[str, Any]]) -> int:
        """
        Wipe the collection and bulk-insert `records` in one transaction.

        Each record is a dict of Transaction column names. Returns the number
        of rows inserted. On failure nothing is committed.
        """
        rows = list(records)
        with self.session_scope() as session:
            deleted = session.execute(delete(Transaction)).rowcount
            if rows:
                session.execute(insert(Transaction), rows)
        logger.info("transactions_replaced deleted=%s inserted=%d", deleted, len(rows))
        return len(rows)
