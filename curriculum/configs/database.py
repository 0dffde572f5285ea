"""
Connection settings for the curriculum database.

Values come from POSTGRES_* environment variables (or .env). Setting
POSTGRES_URL_OVERRIDE to any async SQLAlchemy URL bypasses the Postgres
fields entirely, which is how local runs point at SQLite.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from curriculum.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Postgres connection, pool sizing and URL override."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Server hostname")
    port: int = Field(default=5432, description="Server port")
    user: str = Field(default="postgres", description="Login role")
    password: str = Field(default="postgres", description="Login password")
    db: str = Field(default="curriculum", description="Database name")

    pool_size: int = Field(default=10, ge=1, description="Persistent connections kept in the pool")
    max_overflow: int = Field(default=20, ge=0, description="Extra connections allowed under load")
    pool_timeout: int = Field(default=30, ge=1, description="Seconds to wait for a free connection")
    echo_sql: bool = Field(default=False, description="Log emitted SQL")

    sslmode: str = Field(default="require", description="'require' adds ssl=require to the asyncpg URL")

    url_override: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL (e.g. sqlite+aiosqlite:///./dev.db); wins over host/port fields",
    )

    @property
    def async_database_url(self) -> str:
        """URL handed to create_async_engine."""
        if self.url_override:
            return self.url_override
        url = (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )
        # asyncpg spells it ssl, not sslmode
        if self.sslmode == "require":
            url += "?ssl=require"
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")
