"""
In-memory record store for local runs and tests.
"""

import asyncio
from datetime import datetime, timezone
from typing import Dict, Optional

from shared.logging import get_logger
from ..records.models import Record


class InMemoryRecordStore:
    """Dict-backed record store.

    Records are copied on the way in and out so callers never hold a
    reference into the store.
    """

    def __init__(self):
        self.logger = get_logger("records.persistence.memory")
        self._records: Dict[int, Record] = {}
        self._lock = asyncio.Lock()

    async def start(self):
        self.logger.info("In-memory record store started")

    async def stop(self):
        self.logger.info("In-memory record store stopped")

    async def health_check(self) -> bool:
        return True

    async def create(self, record: Record) -> int:
        async with self._lock:
            if record.id in self._records:
                self.logger.warning("Record id already taken", record_id=record.id)
                return 0
            now = datetime.now(timezone.utc)
            stored = record.copy()
            stored.created_at = now
            stored.updated_at = now
            self._records[record.id] = stored
            record.created_at = now
            record.updated_at = now
            return 1

    async def find_by_id(self, record_id: int) -> Optional[Record]:
        async with self._lock:
            stored = self._records.get(record_id)
            return stored.copy() if stored else None

    async def save(self, record: Record) -> int:
        async with self._lock:
            if record.id not in self._records:
                self.logger.warning("Record vanished before save", record_id=record.id)
                return 0
            record.updated_at = datetime.now(timezone.utc)
            self._records[record.id] = record.copy()
            return 1

    def __len__(self) -> int:
        return len(self._records)
