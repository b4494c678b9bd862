from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Simple Bank API"
    database_url: str = "sqlite:///simple_bank.db"
    log_level: str = "INFO"
    # Seconds a SQLite connection waits for the write lock before failing.
    sqlite_busy_timeout: float = Field(default=30.0, gt=0)
    default_page_size: int = Field(default=10, ge=1)
    transfer_timeout: Optional[float] = Field(default=None, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SIMPLE_BANK_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
