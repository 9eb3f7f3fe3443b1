from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MALL_",
        case_sensitive=False,
    )

    # Design default: local async sqlite database.
    db_url: str = "sqlite+aiosqlite:///./data/dev.db"

    log_level: str = "INFO"

    # Auth (JWT)
    jwt_signing_keys_json: str | None = None
    jwt_kid_current: str = "dev-1"

    # CORS (local web dev)
    cors_allow_origin: str = "http://localhost:3000"
    cors_allow_credentials: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
