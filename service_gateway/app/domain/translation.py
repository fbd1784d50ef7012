"""
HTTP <-> RPC translation helpers for the Gateway.

Everything here is pure: no I/O, no service calls. Routes use these to
reject malformed requests before they reach the records service and to
turn RPC failures into HTTP responses.
"""

import re
from typing import Optional, Type, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError as PydanticValidationError

from shared.errors import RecordServiceException, RpcCode, DecodeError
from shared.rpc_messages import INT64_MIN, INT64_MAX

BEARER_SCHEME = "bearer"

MISSING_TOKEN_DETAIL = "Unauthorized: Bearer token not provided"
INVALID_TOKEN_DETAIL = "Unauthorized: Invalid Bearer token"
INTERNAL_ERROR_DETAIL = "Internal Server Error"

_RECORD_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from ``Bearer <token>``, or ``""`` if absent or malformed."""
    if not authorization:
        return ""
    parts = authorization.split(" ")
    if len(parts) == 2 and parts[0].lower() == BEARER_SCHEME:
        return parts[1]
    return ""


def parse_record_id(raw: str) -> int:
    """Parse a signed 64-bit decimal id from a path segment."""
    if not _RECORD_ID_PATTERN.fullmatch(raw):
        raise DecodeError("Invalid record id", details={"id": raw})
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise DecodeError("Invalid record id", details={"id": raw})
    return value


def decode_body(body: bytes, model: Type[ModelT]) -> ModelT:
    """Decode a JSON request body into ``model``."""
    try:
        return model.model_validate_json(body)
    except PydanticValidationError as e:
        raise DecodeError(details={"errors": e.error_count()}) from e


def rpc_error_to_http(error: RecordServiceException) -> HTTPException:
    """Map a typed failure to the HTTP error the client sees."""
    if error.code == RpcCode.UNAUTHENTICATED:
        return HTTPException(
            status_code=401,
            detail=INVALID_TOKEN_DETAIL,
            headers={"WWW-Authenticate": "Bearer"}
        )
    if error.code == RpcCode.INVALID_ARGUMENT:
        return HTTPException(status_code=400, detail=error.message)
    return HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL)


def missing_token_error() -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=MISSING_TOKEN_DETAIL,
        headers={"WWW-Authenticate": "Bearer"}
    )
