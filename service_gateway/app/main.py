"""
API Gateway service for the Record Access Layer.

Translates REST calls on ``/record`` into records-service RPCs.
"""

from typing import Optional, Tuple

from fastapi import Request

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.errors import RecordServiceException
from shared.rpc_messages import RecordFields

from .adapters.records_client import RecordsClient
from .domain.schemas import RecordView, CreateRecordView, UpdateRecordView
from .domain.translation import (
    extract_bearer_token, parse_record_id, decode_body,
    rpc_error_to_http, missing_token_error,
)


class GatewayService(BaseService):
    """API Gateway service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None, records_client: Optional[RecordsClient] = None):
        super().__init__("gateway", config)
        self.records_client = records_client if records_client is not None else RecordsClient(
            self.config.records_service_url,
            timeout=self.config.rpc_timeout_seconds,
            metrics=self.metrics
        )

        self._setup_record_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    def _translate(self, route: str, error: RecordServiceException):
        http_error = rpc_error_to_http(error)
        self.logger.warning(
            "Record request rejected",
            route=route,
            code=error.code.value,
            message=error.message,
            status_code=http_error.status_code
        )
        return http_error

    def _require_token(self, request: Request) -> str:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if not token:
            self.logger.info("Bearer token missing", path=request.url.path)
            raise missing_token_error()
        return token

    def _setup_record_routes(self):
        """Set up the REST record routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "gateway",
                "message": "Record Access Layer - API Gateway",
                "version": "1.0.0",
                "upstream": self.config.records_service_url
            }

        @self.app.post("/record", response_model=CreateRecordView, response_model_exclude_none=True)
        async def create_record(request: Request):
            """Create a record and hand out its bearer token."""
            try:
                fields = decode_body(await request.body(), RecordFields)
                response = await self.records_client.create_record(fields)
            except RecordServiceException as e:
                raise self._translate("create_record", e)

            return CreateRecordView.from_response(response)

        @self.app.get("/record/{record_id}", response_model=RecordView)
        async def get_record(record_id: str, request: Request):
            """Read a record; requires its bearer token."""
            try:
                parsed_id = parse_record_id(record_id)
            except RecordServiceException as e:
                raise self._translate("get_record", e)

            token = self._require_token(request)

            try:
                response = await self.records_client.get_record(parsed_id, token)
            except RecordServiceException as e:
                raise self._translate("get_record", e)

            return RecordView.from_message(response.record)

        @self.app.put("/record/{record_id}", response_model=UpdateRecordView, response_model_exclude_none=True)
        async def update_record(record_id: str, request: Request):
            """Replace a record's name and age; requires its bearer token."""
            try:
                parsed_id = parse_record_id(record_id)
            except RecordServiceException as e:
                raise self._translate("update_record", e)

            token = self._require_token(request)

            try:
                fields = decode_body(await request.body(), RecordFields)
                response = await self.records_client.update_record(parsed_id, token, fields)
            except RecordServiceException as e:
                raise self._translate("update_record", e)

            return UpdateRecordView.from_response(response)

    def bind_address(self) -> Tuple[str, int]:
        return self.config.http_host, self.config.http_port


def create_app(config: Optional[ServiceConfig] = None):
    """Create gateway service application."""
    service = GatewayService(config)
    return service.app


if __name__ == "__main__":
    service = GatewayService()
    service.run()
