"""
Worker and dispatch configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Worker pool sizing and dispatch backend selection
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from jobserver.configs.base import BaseSettings


class WorkerSettings(BaseSettings):
    """Worker pool configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WORKER_",
        case_sensitive=False,
        extra="ignore",
    )

    instances: int = Field(
        default=4,
        ge=1,
        description="Concurrent workers consuming the in-process channel",
    )
    dispatch_backend: Literal["memory", "celery"] = Field(
        default="memory",
        description="memory: in-process queue; celery: broker-backed task queue",
    )
    shutdown_grace_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Time busy workers get to finish at shutdown before being cancelled",
    )
