"""
Records service client for Gateway.
"""

from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from shared.logging import get_logger, get_request_id
from shared.errors import RpcCode, RpcError
from shared.metrics import MetricsCollector
from shared.rpc_messages import (
    RecordFields,
    CreateRecordRequest, CreateRecordResponse,
    GetRecordRequest, GetRecordResponse,
    UpdateRecordRequest, UpdateRecordResponse,
)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class RecordsClient:
    """Client for the records RPC surface.

    Failures are never retried; each one surfaces as an ``RpcError``
    carrying the remote code (or ``Unknown`` when no code is available).
    """

    def __init__(self, records_service_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.records_service_url = records_service_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.metrics = metrics
        self.logger = get_logger("gateway.records_client")

    async def create_record(self, fields: RecordFields) -> CreateRecordResponse:
        return await self._call(
            "CreateRecord",
            CreateRecordRequest(record=fields),
            CreateRecordResponse
        )

    async def get_record(self, record_id: int, token: str) -> GetRecordResponse:
        return await self._call(
            "GetRecord",
            GetRecordRequest(id=record_id, token=token),
            GetRecordResponse
        )

    async def update_record(self, record_id: int, token: str, fields: RecordFields) -> UpdateRecordResponse:
        return await self._call(
            "UpdateRecord",
            UpdateRecordRequest(id=record_id, token=token, record=fields),
            UpdateRecordResponse
        )

    async def _call(self, method: str, request: BaseModel, response_model: Type[ResponseT]) -> ResponseT:
        try:
            result = await self._invoke(method, request, response_model)
        except RpcError as e:
            self._count(method, e.code.value)
            raise
        self._count(method, "OK")
        return result

    async def _invoke(self, method: str, request: BaseModel, response_model: Type[ResponseT]) -> ResponseT:
        headers = {}
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id

        try:
            async with httpx.AsyncClient(
                base_url=self.records_service_url,
                timeout=self.timeout,
                transport=self.transport
            ) as client:
                response = await client.post(
                    f"/rpc/{method}",
                    json=request.model_dump(),
                    headers=headers
                )
        except httpx.HTTPError as e:
            self.logger.error("Records service HTTP error", method=method, error=str(e))
            raise RpcError(
                RpcCode.UNKNOWN,
                "Records service unavailable",
                details={"http_error": str(e)}
            ) from e

        if response.status_code == 200:
            try:
                return response_model.model_validate_json(response.content)
            except PydanticValidationError as e:
                self.logger.error("Malformed records service response", method=method)
                raise RpcError(RpcCode.UNKNOWN, "Malformed RPC response") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None
        error = RpcError.from_payload(payload)
        self.logger.warning(
            "Records service call failed",
            method=method,
            status_code=response.status_code,
            code=error.code.value
        )
        raise error

    def _count(self, method: str, code: str):
        if self.metrics:
            self.metrics.increment_counter("rpc_calls_total", method=method, code=code)
