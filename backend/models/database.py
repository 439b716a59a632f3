"""
Declarative base shared by all models.

Models bind to an engine only through db.store.TransactionStore; nothing in
this package holds a connection.
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
