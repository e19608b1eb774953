"""
CRConfig Database Package - read-only access to Traffic Ops state.

PostgresStore: PostgreSQL with pooled, snapshot-scoped readers
MemoryStore: in-memory rows for tests and fixture runs
"""

from src.crconfig.database.base import Store, StoreReader
from src.crconfig.database.postgres_store import (
    MemoryStore,
    PostgresReader,
    PostgresStore,
)

__all__ = [
    "Store",
    "StoreReader",
    "PostgresStore",
    "PostgresReader",
    "MemoryStore",
]
