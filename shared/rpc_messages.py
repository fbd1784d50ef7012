"""
Wire messages for the record RPC channel.

Both the records service and the gateway client speak these schemas, so a
field rename on either side shows up as a decode failure rather than as
silently missing data.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Column widths: ids are BIGINT, ages are INTEGER
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
INT32_MAX = 2 ** 31 - 1


class RecordFields(BaseModel):
    """Caller-supplied record fields.

    Absent fields decode to zero values; the service decides whether they
    are acceptable. Decoding is strict: ``true`` or ``"7"`` is not an int.
    """
    model_config = ConfigDict(extra="ignore", strict=True)

    id: int = Field(0, ge=INT64_MIN, le=INT64_MAX, description="Record id, chosen by the caller")
    first_name: str = Field("", description="First name")
    last_name: str = Field("", description="Last name")
    age: int = Field(0, le=INT32_MAX, description="Age in years")


class RecordMessage(BaseModel):
    """A record as returned by the service."""
    id: int
    first_name: str
    last_name: str
    age: int
    token: Optional[str] = None


class CreateRecordRequest(BaseModel):
    record: RecordFields


class CreateRecordResponse(BaseModel):
    record: Optional[RecordMessage] = None
    token: str
    message: str


class GetRecordRequest(BaseModel):
    id: int = Field(ge=INT64_MIN, le=INT64_MAX)
    token: str


class GetRecordResponse(BaseModel):
    record: RecordMessage


class UpdateRecordRequest(BaseModel):
    id: int = Field(ge=INT64_MIN, le=INT64_MAX)
    token: str
    record: RecordFields


class UpdateRecordResponse(BaseModel):
    record: Optional[RecordMessage] = None
    message: str
