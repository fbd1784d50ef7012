"""
Persistence package for the Records Service.

- base: the ``RecordStore`` contract the service depends on.
- postgres: asyncpg-backed store (production).
- memory: dict-backed store (local runs and tests).

``create_record_store`` picks the implementation from the DSN scheme.
"""

from .base import RecordStore
from .memory import InMemoryRecordStore
from .postgres import PostgreSQLRecordStore

MEMORY_DSN = "memory://"


def create_record_store(dsn: str, min_size: int = 2, max_size: int = 10,
                        command_timeout: float = 30.0) -> RecordStore:
    """Build the store named by ``dsn``."""
    if dsn.startswith(MEMORY_DSN):
        return InMemoryRecordStore()
    return PostgreSQLRecordStore(
        dsn,
        min_size=min_size,
        max_size=max_size,
        command_timeout=command_timeout
    )


__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "PostgreSQLRecordStore",
    "create_record_store",
]
