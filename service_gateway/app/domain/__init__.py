"""
Domain helpers for the Gateway.

- translation: bearer extraction, path/body decoding and RPC-to-HTTP
  error mapping.
- schemas: HTTP response views of records.
"""

from .translation import (
    extract_bearer_token,
    parse_record_id,
    decode_body,
    rpc_error_to_http,
)

__all__ = [
    "extract_bearer_token",
    "parse_record_id",
    "decode_body",
    "rpc_error_to_http",
]
