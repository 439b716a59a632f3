# Database utilities package
from .engine import build_engine
from .store import TransactionStore
