"""
Top-level settings object for the curriculum service.

Nests the database block and carries the service-wide knobs (dashboard
size, search paging cap). Read through get_settings(), which caches the
instance so the environment is parsed once per process.

Dependencies: curriculum.configs.base, curriculum.configs.database
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from curriculum.configs.base import BaseSettings
from curriculum.configs.database import DatabaseSettings


class Settings(BaseSettings):
    """Service settings; database options live under .database."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    top_courses_limit: int = Field(
        default=5,
        ge=1,
        description="Number of courses listed in dashboard statistics",
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        description="Upper bound for page_size on course search",
    )


@lru_cache
def get_settings() -> Settings:
    """Cached Settings instance; call get_settings.cache_clear() after changing env vars."""
    return Settings()
