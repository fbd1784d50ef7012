"""
Record store contract.
"""

from typing import Optional, Protocol

from ..records.models import Record


class RecordStore(Protocol):
    """Opaque keyed record repository.

    Implementations own schema management and their own consistency;
    the service only relies on the operations below.
    """

    async def start(self) -> None: ...

    async def stop(self) -> None: ...

    async def health_check(self) -> bool: ...

    async def create(self, record: Record) -> int:
        """Insert ``record``; return the number of rows affected."""
        ...

    async def find_by_id(self, record_id: int) -> Optional[Record]:
        """Return the record for ``record_id`` or ``None``."""
        ...

    async def save(self, record: Record) -> int:
        """Persist an existing record; return the number of rows updated."""
        ...
