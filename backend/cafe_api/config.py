"""Cafe API settings, read from the environment or a local .env file.

Every setting has a default so `uvicorn cafe_api.main:app` starts against the
docker-compose database with no extra setup. get_settings() is cached, so
tests that change the environment must call get_settings.cache_clear().
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_DRIVER = "postgresql+asyncpg://"
_SYNC_SCHEMES = ("postgres://", "postgresql://")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = f"{_ASYNC_DRIVER}cafes:cafes@db:5432/cafes"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    # Origins allowed to call /api/v1/cafes from a browser
    cors_origins: list[str] = ["http://localhost:5173"]

    log_level: str = "INFO"
    log_format: str = "json"

    # Default JSON array for `cafe-api-seed` when no SOURCE argument is given
    seed_source: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v):
        """postgres:// and postgresql:// URLs are rewritten to the asyncpg driver."""
        if isinstance(v, str):
            for scheme in _SYNC_SCHEMES:
                if v.startswith(scheme):
                    return _ASYNC_DRIVER + v[len(scheme):]
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
