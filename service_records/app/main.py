"""
Records service for the Record Access Layer.

Serves the record RPC surface (CreateRecord, GetRecord, UpdateRecord) as
JSON-over-HTTP methods under ``/rpc``.
"""

from contextlib import asynccontextmanager
from typing import Optional, Tuple

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.errors import RecordServiceException
from shared.rpc_messages import (
    CreateRecordRequest, CreateRecordResponse,
    GetRecordRequest, GetRecordResponse,
    UpdateRecordRequest, UpdateRecordResponse,
)

from .persistence import RecordStore, create_record_store
from .records.service import RecordService


class RecordsService(BaseService):
    """Records service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None, store: Optional[RecordStore] = None):
        super().__init__("records", config)

        self.store = store if store is not None else create_record_store(
            self.config.store_dsn,
            min_size=self.config.store_min_pool_size,
            max_size=self.config.store_max_pool_size,
            command_timeout=self.config.store_command_timeout
        )
        self.record_service = RecordService(self.store)

        @self.app.on_event("startup")
        async def _startup():
            await self.start()

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.stop()

        self._setup_records_routes()

    @asynccontextmanager
    async def _observe(self, operation: str):
        """Count and time one RPC method call."""
        with self.metrics.time_operation("record_operation_duration_seconds", operation=operation):
            try:
                yield
            except RecordServiceException as e:
                self.metrics.increment_counter("record_operations_total", operation=operation, outcome=e.code.value)
                raise
        self.metrics.increment_counter("record_operations_total", operation=operation, outcome="OK")
        self.metrics.record_business_event(operation)

    def _setup_records_routes(self):
        """Set up the RPC methods."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "records",
                "message": "Record Access Layer - Records Service",
                "version": "1.0.0",
                "methods": ["CreateRecord", "GetRecord", "UpdateRecord"]
            }

        @self.app.post("/rpc/CreateRecord", response_model=CreateRecordResponse,
                       response_model_exclude_none=True)
        async def create_record(request: CreateRecordRequest):
            async with self._observe("CreateRecord"):
                result = await self.record_service.create_record(request.record)
            return CreateRecordResponse(
                record=result.record.to_message(),
                token=result.token,
                message=result.message
            )

        @self.app.post("/rpc/GetRecord", response_model=GetRecordResponse)
        async def get_record(request: GetRecordRequest):
            async with self._observe("GetRecord"):
                record = await self.record_service.get_record(request.id, request.token)
            return GetRecordResponse(record=record.to_message())

        @self.app.post("/rpc/UpdateRecord", response_model=UpdateRecordResponse,
                       response_model_exclude_none=True)
        async def update_record(request: UpdateRecordRequest):
            async with self._observe("UpdateRecord"):
                result = await self.record_service.update_record(request.id, request.token, request.record)
            return UpdateRecordResponse(
                record=result.record.to_message(),
                message=result.message
            )

    async def _check_dependencies(self):
        """Check records service dependencies."""
        try:
            healthy = await self.store.health_check()
        except RecordServiceException:
            healthy = False
        return {"store": "ok" if healthy else "error"}

    def bind_address(self) -> Tuple[str, int]:
        return self.config.rpc_host, self.config.rpc_port

    async def start(self):
        """Start records service components."""
        await self.store.start()
        self.logger.info("Records service started")

    async def stop(self):
        """Stop records service components."""
        await self.store.stop()
        self.logger.info("Records service stopped")


def create_app(config: Optional[ServiceConfig] = None):
    """Create records service application."""
    service = RecordsService(config)
    return service.app


if __name__ == "__main__":
    service = RecordsService()
    service.run()
