"""
Canonical database engine factory.

This is the SINGLE place that calls create_engine(). The app factory and the
CLI both build their TransactionStore from an engine made here, so timeout
and pool settings come from one source (config.engine_options_for).

Usage:
    from db.engine import build_engine

    # Long-lived web process (QueuePool for PostgreSQL)
    engine = build_engine(database_url, options)

    # One-shot CLI command (no pooling)
    engine = build_engine(database_url, options, kind="job")

Warmup with retry:
    - Handles slow database cold starts
    - Exponential backoff (0.75s, 1.5s, 3s, 6s)
    - Fails fast after 4 attempts with clear error
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import NullPool

log = logging.getLogger(__name__)


def _warmup(engine: Engine, attempts: int = 4, base_sleep: float = 0.75) -> None:
    """
    Warm up database connection with exponential backoff retry.

    Args:
        engine: SQLAlchemy engine to warm up
        attempts: Number of retry attempts (default 4)
        base_sleep: Base sleep time in seconds (doubles each attempt)

    Raises:
        OperationalError: If all attempts fail
    """
    last_error: Optional[Exception] = None

    for i in range(attempts):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            log.info("db_warmup_success attempt=%d", i + 1)
            return
        except OperationalError as e:
            last_error = e
            sleep_s = base_sleep * (2 ** i)
            log.warning(
                "db_warmup_retry attempt=%d/%d sleep_s=%.2f err=%s",
                i + 1, attempts, sleep_s, str(e)[:100]
            )
            time.sleep(sleep_s)

    log.error("db_warmup_failed after %d attempts", attempts)
    raise last_error  # type: ignore[misc]


def build_engine(
    database_url: str,
    options: Optional[Dict[str, Any]] = None,
    *,
    kind: str = "web",
    warmup: bool = False,
) -> Engine:
    """
    Create a database engine for the given URL.

    Args:
        database_url: SQLAlchemy URL
        options: Engine options (see config.engine_options_for)
        kind: "web" uses the configured pool; "job" uses NullPool for
              short-lived processes such as CLI commands
        warmup: Run a SELECT 1 with retry before returning

    Raises:
        ValueError: If kind is not "job" or "web"
        OperationalError: If warmup fails after retries
    """
    if kind not in ("job", "web"):
        raise ValueError("kind must be 'job' or 'web'")

    opts = dict(options or {})

    if kind == "job":
        connect_args = dict(opts.pop("connect_args", {}) or {})
        engine = create_engine(
            database_url,
            poolclass=NullPool,
            connect_args=connect_args,
            pool_pre_ping=opts.get("pool_pre_ping", False),
        )
        log.info("db_engine_created kind=job poolclass=NullPool")
    else:
        engine = create_engine(database_url, **opts)
        log.info(
            "db_engine_created kind=web pool_size=%s max_overflow=%s",
            opts.get("pool_size", "default"),
            opts.get("max_overflow", "default")
        )

    if warmup:
        _warmup(engine)

    return engine
