from __future__ import annotations

from functools import cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BankSettings(BaseSettings):
    access_key: str | None = None
    source: str = "USD"
    ttl_in_seconds: int | None = Field(default=None, ge=0)
    secure_connection: bool = False
    cache_path: Path | None = None
    host: str = "apilayer.net"
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="CURRENCYLAYER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("source")
    @classmethod
    def _normalize_source(cls, value: str) -> str:
        return value.strip().upper()


@cache
def config() -> BankSettings:
    return BankSettings()
