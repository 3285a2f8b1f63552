"""
User/project registry configuration settings.

Optional allow lists for submission validation. Leaving a list unset
accepts every id.

Dependencies: pydantic, pydantic_settings
System role: Validation collaborator configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from jobserver.configs.base import BaseSettings


class RegistrySettings(BaseSettings):
    """Known users and projects."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REGISTRY_",
        case_sensitive=False,
        extra="ignore",
    )

    user_ids: list[int] | None = Field(
        default=None,
        description="Known user ids (JSON list); unset accepts all",
    )
    project_ids: list[int] | None = Field(
        default=None,
        description="Known project ids (JSON list); unset accepts all",
    )
