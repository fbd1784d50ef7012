"""
PostgreSQL persistence layer for the Records Service.
"""

import asyncio
from typing import Optional

import asyncpg

from shared.logging import get_logger
from shared.errors import StoreUnavailableError
from ..records.models import Record

# Failures that mean the store itself is unreachable or broken
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def rows_affected(status: str) -> int:
    """Parse the row count out of a command status such as ``INSERT 0 1``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class PostgreSQLRecordStore:
    """PostgreSQL persistence layer for records."""

    def __init__(self, dsn: str, min_size: int = 2, max_size: int = 10, command_timeout: float = 30.0):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self.logger = get_logger("records.persistence.postgres")
        self.pool: Optional[asyncpg.Pool] = None

    async def start(self):
        """Open the pool and make sure the schema exists."""
        try:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=self.command_timeout
            )
            await self._create_tables()
        except STORE_ERRORS as e:
            self.logger.error("Failed to start PostgreSQL record store", error=str(e))
            raise StoreUnavailableError("Failed to connect to record store", details={"error": str(e)}) from e

        self.logger.info("PostgreSQL record store started")

    async def stop(self):
        """Close the pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.logger.info("PostgreSQL record store stopped")

    def _require_pool(self) -> asyncpg.Pool:
        if self.pool is None:
            raise StoreUnavailableError("Record store is not connected")
        return self.pool

    async def _create_tables(self):
        async with self._require_pool().acquire() as conn:
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    id BIGINT PRIMARY KEY,
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    age INTEGER NOT NULL CHECK (age > 0),
                    token VARCHAR(64) NOT NULL,
                    created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
                    updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
                );
            """)

    async def create(self, record: Record) -> int:
        """Insert a record; an id that already exists affects zero rows."""
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                status = await conn.execute("""
                    INSERT INTO records (id, first_name, last_name, age, token, created_at, updated_at)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    ON CONFLICT (id) DO NOTHING
                """,
                    record.id, record.first_name, record.last_name, record.age,
                    record.token, record.created_at, record.updated_at
                )
        except STORE_ERRORS as e:
            self.logger.error("Error creating record", record_id=record.id, error=str(e))
            raise StoreUnavailableError(str(e)) from e

        count = rows_affected(status)
        self.logger.info("Record insert executed", record_id=record.id, rows_affected=count)
        return count

    async def find_by_id(self, record_id: int) -> Optional[Record]:
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow("""
                    SELECT id, first_name, last_name, age, token, created_at, updated_at
                    FROM records WHERE id = $1
                """, record_id)
        except STORE_ERRORS as e:
            self.logger.error("Error loading record", record_id=record_id, error=str(e))
            raise StoreUnavailableError(str(e)) from e

        if not row:
            return None
        return self._row_to_record(row)

    async def save(self, record: Record) -> int:
        """Write mutable fields back; id and token are never touched.

        Returns the number of rows updated, zero if the record is gone.
        """
        pool = self._require_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow("""
                    UPDATE records
                    SET first_name = $2, last_name = $3, age = $4, updated_at = NOW()
                    WHERE id = $1
                    RETURNING updated_at
                """, record.id, record.first_name, record.last_name, record.age)
        except STORE_ERRORS as e:
            self.logger.error("Error saving record", record_id=record.id, error=str(e))
            raise StoreUnavailableError(str(e)) from e

        if row is None:
            self.logger.warning("Record vanished before save", record_id=record.id)
            return 0
        record.updated_at = row["updated_at"]
        self.logger.info("Record saved", record_id=record.id)
        return 1

    def _row_to_record(self, row) -> Record:
        return Record(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            age=row["age"],
            token=row["token"],
            created_at=row["created_at"],
            updated_at=row["updated_at"]
        )

    async def health_check(self) -> bool:
        """Check database health."""
        if self.pool is None:
            return False
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
                return True
        except STORE_ERRORS:
            return False
