import os
from dotenv import load_dotenv

load_dotenv()


DEFAULT_DATABASE_URL = 'postgresql://localhost:5432/transactions_dashboard'
DEFAULT_SEED_DATA_URL = 'https://s3.amazonaws.com/roxiler.com/product_transaction.json'


def _get_database_url():
    """
    Get DATABASE_URL, normalizing Heroku/Render style postgres:// URLs.

    SQLAlchemy only accepts the postgresql:// scheme.
    """
    database_url = os.getenv('DATABASE_URL', DEFAULT_DATABASE_URL)
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)
    return database_url


def engine_options_for(database_url):
    """
    Engine options appropriate for the database backend.

    PostgreSQL gets pool and timeout settings; SQLite (tests, local demos)
    takes none of them.
    """
    if database_url.startswith('sqlite'):
        return {}
    return {
        'pool_pre_ping': True,      # Verify connection is alive before using
        'pool_recycle': 300,        # Recycle connections every 5 minutes
        'pool_timeout': 30,
        'pool_size': 5,
        'max_overflow': 10,
        'connect_args': {
            'connect_timeout': 10,
            'options': '-c statement_timeout=30000',  # 30s query timeout
        }
    }


def _get_int(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    SQLALCHEMY_DATABASE_URI = _get_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = engine_options_for(SQLALCHEMY_DATABASE_URI)
    AUTO_CREATE_TABLES = os.getenv('AUTO_CREATE_TABLES', 'true').lower() == 'true'
    # SELECT 1 with retry before the web app serves (slow database cold starts)
    DB_WARMUP = os.getenv('DB_WARMUP', 'false').lower() == 'true'

    # Seed source for /api/initialize and `cli.py seed`
    SEED_DATA_URL = os.getenv('SEED_DATA_URL', DEFAULT_SEED_DATA_URL)
    SEED_TIMEOUT_SECONDS = _get_int('SEED_TIMEOUT_SECONDS', 30)

    # Listing pagination
    DEFAULT_PER_PAGE = _get_int('DEFAULT_PER_PAGE', 10)
    MAX_PER_PAGE = _get_int('MAX_PER_PAGE', 100)

    # Worker threads for /api/combined-data (statistics, bar chart, pie chart)
    COMBINED_MAX_WORKERS = _get_int('COMBINED_MAX_WORKERS', 3)

    # Request logging middleware
    REQUEST_LOG_ENABLED = os.getenv('REQUEST_LOG_ENABLED', 'true').lower() == 'true'
    REQUEST_LOG_SAMPLE_RATE = os.getenv('REQUEST_LOG_SAMPLE_RATE', '0.0')
    REQUEST_LOG_ENDPOINTS = os.getenv('REQUEST_LOG_ENDPOINTS', '')
