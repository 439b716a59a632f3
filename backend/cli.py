#!/usr/bin/env python3
"""
CLI for the Transactions Dashboard

Commands:
    create-tables  - Create the transactions table if missing
    seed           - Wipe and reload transactions from the seed feed or a file
    stats          - Print combined statistics for a month as JSON

Usage:
    python cli.py seed
    python cli.py seed --url https://example.com/product_transaction.json
    python cli.py seed --file data/product_transaction.json
    python cli.py stats --month March
"""

import json
import logging
import sys

import click

from config import Config, engine_options_for
from db.store import TransactionStore


def get_store(database_url=None) -> TransactionStore:
    """Build a one-shot store (NullPool) for CLI commands."""
    url = database_url or Config.SQLALCHEMY_DATABASE_URI
    return TransactionStore.from_url(
        url,
        engine_options_for(url),
        kind="job",
    )


@click.group()
@click.version_option(version="1.0.0", prog_name="transactions-cli")
@click.option("--database-url", envvar="DATABASE_URL", default=None,
              help="Override DATABASE_URL")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, database_url, verbose):
    """Transactions Dashboard CLI - seed and inspect the transactions store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url


@cli.command("create-tables")
@click.pass_context
def create_tables(ctx):
    """Create the transactions table if missing."""
    store = get_store(ctx.obj.get("database_url"))
    try:
        store.create_tables()
    finally:
        store.dispose()
    click.echo("Tables ready")


@cli.command("seed")
@click.option("--url", default=None, help="Seed feed URL (default: SEED_DATA_URL)")
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Load from a local JSON file instead of HTTP")
@click.option("--timeout", type=int, default=Config.SEED_TIMEOUT_SECONDS, show_default=True,
              help="HTTP timeout in seconds")
@click.pass_context
def seed(ctx, url, file_path, timeout):
    """
    Wipe and reload all transactions.

    Reads the seed feed over HTTP (SEED_DATA_URL or --url) or from --file.
    """
    from services.seed_service import SeedClient, SeedError, initialize_store, load_seed_file

    if url and file_path:
        raise click.UsageError("Use either --url or --file, not both")

    store = get_store(ctx.obj.get("database_url"))
    try:
        store.create_tables()
        if file_path:
            click.echo(f"Loading seed file {file_path}...")
            records = load_seed_file(file_path)
        else:
            source = url or Config.SEED_DATA_URL
            click.echo(f"Fetching seed data from {source}...")
            records = SeedClient(source, timeout=timeout).fetch()
        count = initialize_store(store, records)
    except SeedError as e:
        click.echo(f"Seeding failed: {e}", err=True)
        sys.exit(1)
    finally:
        store.dispose()

    click.echo(f"Loaded {count} transactions")


@cli.command("stats")
@click.option("--month", required=True, help="Month name, abbreviation or number")
@click.option("--year", type=int, default=None, help="Optional year")
@click.pass_context
def stats(ctx, month, year):
    """Print statistics, bar chart and pie chart for a month as JSON."""
    from services.analytics_service import get_combined_data

    store = get_store(ctx.obj.get("database_url"))
    try:
        result = get_combined_data(store, month, year, max_workers=Config.COMBINED_MAX_WORKERS)
    finally:
        store.dispose()

    click.echo(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    cli()
