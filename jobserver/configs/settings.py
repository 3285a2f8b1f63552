"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from jobserver.configs.base import BaseSettings
from jobserver.configs.celery_config import CelerySettings
from jobserver.configs.database import DatabaseSettings
from jobserver.configs.processor import ProcessorSettings
from jobserver.configs.registry import RegistrySettings
from jobserver.configs.worker import WorkerSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    http_host: str = Field(default="0.0.0.0", description="HTTP bind address")
    http_port: int = Field(default=8067, description="HTTP port")

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    processor: ProcessorSettings = Field(default_factory=ProcessorSettings)
    worker: WorkerSettings = Field(default_factory=WorkerSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    celery: CelerySettings = Field(default_factory=CelerySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from jobserver.configs import get_settings
        settings = get_settings()
    """
    return Settings()
