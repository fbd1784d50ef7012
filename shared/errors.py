"""
Shared error handling for the Record Access Layer.

Every failure that crosses the RPC boundary carries an ``RpcCode`` so the
gateway can translate it without inspecting messages.
"""

from enum import Enum
from typing import Dict, Any, Optional

from opentelemetry import trace
from pydantic import BaseModel


class RpcCode(str, Enum):
    """Structured RPC status codes."""
    INVALID_ARGUMENT = "InvalidArgument"
    UNAUTHENTICATED = "Unauthenticated"
    INTERNAL = "Internal"
    UNKNOWN = "Unknown"


# HTTP status used on the RPC channel for each code
RPC_HTTP_STATUS: Dict[RpcCode, int] = {
    RpcCode.INVALID_ARGUMENT: 400,
    RpcCode.UNAUTHENTICATED: 401,
    RpcCode.INTERNAL: 500,
    RpcCode.UNKNOWN: 500,
}


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


def current_trace_id() -> Optional[str]:
    """Return the active trace id as hex, if a span is recording."""
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        span_context = current_span.get_span_context()
        if span_context.trace_id != 0:
            return f"{span_context.trace_id:032x}"
    return None


class RecordServiceException(Exception):
    """Base exception for Record Access Layer services."""

    def __init__(self, code: RpcCode, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = RpcCode(code)
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return RPC_HTTP_STATUS[self.code]

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            trace_id=current_trace_id(),
            code=self.code.value,
            message=self.message,
            details=self.details
        )


class ValidationError(RecordServiceException):
    """Malformed or missing required record fields."""

    def __init__(self, message: str = "Invalid user data", details: Optional[Dict[str, Any]] = None):
        super().__init__(RpcCode.INVALID_ARGUMENT, message, details)


class AuthorizationError(RecordServiceException):
    """Supplied token does not match the stored one."""

    def __init__(self, message: str = "Unauthenticated", details: Optional[Dict[str, Any]] = None):
        super().__init__(RpcCode.UNAUTHENTICATED, message, details)


class NotFoundError(RecordServiceException):
    """No record exists for the requested id."""

    def __init__(self, message: str = "user not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(RpcCode.UNKNOWN, message, details)


class InternalError(RecordServiceException):
    """Store unavailable, unconfigured or failing."""

    def __init__(self, message: str = "Internal error", details: Optional[Dict[str, Any]] = None):
        super().__init__(RpcCode.INTERNAL, message, details)


class StoreUnavailableError(InternalError):
    """Record store could not be reached or is not started."""

    def __init__(self, message: str = "Record store unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class PersistenceError(RecordServiceException):
    """Store accepted the call but reported an inconsistent result."""

    def __init__(self, message: str = "cannot create user successfully", details: Optional[Dict[str, Any]] = None):
        super().__init__(RpcCode.UNKNOWN, message, details)


class DecodeError(RecordServiceException):
    """Malformed request body or path at the gateway boundary."""

    def __init__(self, message: str = "Error decoding JSON", details: Optional[Dict[str, Any]] = None):
        super().__init__(RpcCode.INVALID_ARGUMENT, message, details)


class RpcError(RecordServiceException):
    """Failure returned by a remote RPC call."""

    def __init__(self, code: RpcCode, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code, message, details)

    @classmethod
    def from_payload(cls, payload: Any) -> "RpcError":
        """Build from a decoded ``ErrorResponse`` body, tolerating junk."""
        if not isinstance(payload, dict):
            return cls(RpcCode.UNKNOWN, "Malformed RPC error response")
        try:
            code = RpcCode(payload.get("code"))
        except ValueError:
            code = RpcCode.UNKNOWN
        message = payload.get("message")
        if not isinstance(message, str):
            message = "RPC call failed"
        details = payload.get("details")
        return cls(code, message, details if isinstance(details, dict) else None)
