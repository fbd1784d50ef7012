"""
HTTP response schemas for the Gateway record routes.

The gateway's record view never carries the bearer token; only the create
response hands it out, in its own field.
"""

from typing import Optional

from pydantic import BaseModel

from shared.rpc_messages import (
    RecordMessage, CreateRecordResponse, UpdateRecordResponse
)


class RecordView(BaseModel):
    """Public record fields."""
    id: int
    first_name: str
    last_name: str
    age: int

    @classmethod
    def from_message(cls, message: Optional[RecordMessage]) -> Optional["RecordView"]:
        if message is None:
            return None
        return cls(
            id=message.id,
            first_name=message.first_name,
            last_name=message.last_name,
            age=message.age
        )


class CreateRecordView(BaseModel):
    record: Optional[RecordView] = None
    token: str
    message: str

    @classmethod
    def from_response(cls, response: CreateRecordResponse) -> "CreateRecordView":
        return cls(
            record=RecordView.from_message(response.record),
            token=response.token,
            message=response.message
        )


class UpdateRecordView(BaseModel):
    record: Optional[RecordView] = None
    message: str

    @classmethod
    def from_response(cls, response: UpdateRecordResponse) -> "UpdateRecordView":
        return cls(
            record=RecordView.from_message(response.record),
            message=response.message
        )
