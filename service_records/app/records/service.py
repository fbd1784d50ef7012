"""
Record request handling for the Records Service.

Owns validation, token issuance and token checks. Every call re-reads
from the store; nothing is cached between calls.
"""

import secrets
import uuid
from typing import Callable, Dict, Optional

from shared.logging import get_logger
from shared.errors import (
    ValidationError, AuthorizationError, NotFoundError, InternalError, PersistenceError
)
from shared.rpc_messages import RecordFields
from ..persistence.base import RecordStore
from .models import Record, CreateResult, UpdateResult

CREATED_MESSAGE = "Created user successfully"
UPDATED_MESSAGE = "User successfully updated"


def generate_token() -> str:
    """Return a fresh opaque bearer token."""
    return str(uuid.uuid4())


def validate_fields(fields: Optional[RecordFields]) -> RecordFields:
    """Reject empty names and non-positive ages."""
    if fields is None:
        raise ValidationError(details={"record": "missing"})

    problems: Dict[str, str] = {}
    if fields.first_name == "":
        problems["first_name"] = "must not be empty"
    if fields.last_name == "":
        problems["last_name"] = "must not be empty"
    if fields.age <= 0:
        problems["age"] = "must be greater than zero"

    if problems:
        raise ValidationError(details=problems)
    return fields


class RecordService:
    """Create, read and update records on behalf of token holders."""

    def __init__(self, store: Optional[RecordStore], token_factory: Callable[[], str] = generate_token):
        self.store = store
        self.token_factory = token_factory
        self.logger = get_logger("records.service")

    def _require_store(self) -> RecordStore:
        if self.store is None:
            raise InternalError("Database connection is nil")
        return self.store

    async def create_record(self, fields: Optional[RecordFields]) -> CreateResult:
        fields = validate_fields(fields)
        store = self._require_store()

        token = self.token_factory()
        record = Record(
            id=fields.id,
            first_name=fields.first_name,
            last_name=fields.last_name,
            age=fields.age,
            token=token
        )

        if await store.create(record) == 0:
            raise PersistenceError(details={"record_id": record.id})

        self.logger.info("Record created", record_id=record.id)
        return CreateResult(record=record, token=token, message=CREATED_MESSAGE)

    async def _load_authorized(self, record_id: int, token: str) -> Record:
        record = await self._require_store().find_by_id(record_id)
        if record is None:
            raise NotFoundError(details={"record_id": record_id})

        if not secrets.compare_digest(record.token.encode(), token.encode()):
            self.logger.warning("Token mismatch", record_id=record_id)
            raise AuthorizationError()
        return record

    async def get_record(self, record_id: int, token: str) -> Record:
        return await self._load_authorized(record_id, token)

    async def update_record(self, record_id: int, token: str, fields: Optional[RecordFields]) -> UpdateResult:
        fields = validate_fields(fields)
        record = await self._load_authorized(record_id, token)

        # id and token stay as stored; the body id is ignored
        record.first_name = fields.first_name
        record.last_name = fields.last_name
        record.age = fields.age

        if await self._require_store().save(record) == 0:
            raise PersistenceError("cannot update user successfully", details={"record_id": record.id})

        self.logger.info("Record updated", record_id=record.id)
        return UpdateResult(record=record, message=UPDATED_MESSAGE)
