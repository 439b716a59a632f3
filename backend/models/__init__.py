"""
Models package - SQLAlchemy models
"""
from models.database import Base
from models.transaction import Transaction

__all__ = [
    'Base',
    'Transaction',
]
