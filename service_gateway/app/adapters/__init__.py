"""
Adapters package for the Gateway Service.

Contains the RPC client for the records service. Adapters encapsulate:

- Base URLs, timeouts and request shapes
- Decoding of success messages and structured RPC errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .records_client import RecordsClient

__all__ = [
    "RecordsClient",
]
