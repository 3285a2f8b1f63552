"""
External processor configuration settings.

Endpoint of the remote computation service called by workers.

Dependencies: pydantic, pydantic_settings
System role: Outbound HTTP client configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from jobserver.configs.base import BaseSettings


class ProcessorSettings(BaseSettings):
    """Remote job processor configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROCESSOR_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:8081/",
        description="Base URL of the external processor; /process is appended",
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="Per-call timeout; unset means wait indefinitely",
    )
