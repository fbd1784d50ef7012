"""
Shared configuration management for the Record Access Layer.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="RECORDS_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Record store
    store_dsn: str = Field(default="postgresql://postgres@localhost:5432/records")
    store_min_pool_size: int = Field(default=2, ge=1)
    store_max_pool_size: int = Field(default=10, ge=1)
    store_command_timeout: float = Field(default=30.0, gt=0)

    # RPC channel
    records_service_url: str = Field(default="http://localhost:50051")
    rpc_timeout_seconds: float = Field(default=10.0, gt=0)

    # Listeners
    rpc_host: str = Field(default="0.0.0.0")
    rpc_port: int = Field(default=50051)
    http_host: str = Field(default="0.0.0.0")
    http_port: int = Field(default=8080)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name)
