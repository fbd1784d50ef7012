"""
Shared utilities for the Record Access Layer.

This package aggregates common building blocks consumed by all services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- errors: RPC status codes, canonical error types and responses
- rpc_messages: Wire schemas for the record RPC channel
- base_service: FastAPI service skeleton (middleware, health, handlers)

Any cross-service logic should live here to avoid import cycles across
service packages. Do not import from service_* packages into shared/.
"""
