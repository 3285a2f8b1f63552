"""
Database configuration settings.

Manages job store connection parameters for SQLAlchemy.
Defaults to PostgreSQL through asyncpg; DB_URL overrides the whole URL
(e.g. sqlite+aiosqlite for local runs).

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from jobserver.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Job store database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DB_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Full SQLAlchemy async URL override")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str = Field(default="postgres", description="Database user")
    password: str = Field(default="postgres", description="Database password")
    name: str = Field(default="jobs", description="Database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    create_tables: bool = Field(
        default=False,
        description="Create the jobs table at application startup",
    )

    @property
    def async_database_url(self) -> str:
        """
        Construct async database connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        url = self.async_database_url
        return self.is_sqlite and (":memory:" in url or "mode=memory" in url or url.endswith("://"))
