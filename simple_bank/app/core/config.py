from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Simple Bank API"
    database_url: str = "sqlite:///simple_bank.db"
    log_level: str = "INFO"
    sqlite_busy_timeout: float = 30.0
    list_limit_max: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANK_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
