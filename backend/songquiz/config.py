"""Settings — everything the service reads from its environment.

Invariants:
    - Values come from environment variables or .env, case-insensitively
    - get_settings() builds Settings once per process (lru_cache); tests that
      change the environment must call get_settings.cache_clear()

Design Decisions:
    - The identity contract (header names) is configuration: the auth proxy in
      front of the API decides it, not this service
    - Defaults match the docker-compose database so a bare checkout starts
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = "postgresql+asyncpg://songquiz:songquiz@db:5432/songquiz"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    user_id_header: str = "X-User-Id"
    user_name_header: str = "X-User-Name"

    cors_origins: list[str] = ["http://localhost:4321"]
    default_page_size: int = 20

    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// URLs; the engine needs asyncpg."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return "postgresql+asyncpg://" + v.removeprefix("postgresql://")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
