"""
Record data models for the Records Service.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from shared.rpc_messages import RecordMessage


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Record:
    """A persisted user record."""
    id: int
    first_name: str
    last_name: str
    age: int
    token: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def copy(self) -> "Record":
        return replace(self)

    def to_message(self) -> RecordMessage:
        return RecordMessage(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            age=self.age,
            token=self.token
        )


@dataclass
class CreateResult:
    """Outcome of a successful create."""
    record: Record
    token: str
    message: str


@dataclass
class UpdateResult:
    """Outcome of a successful update."""
    record: Record
    message: str
