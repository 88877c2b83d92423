"""Runtime settings, read from the environment and an optional ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FRESHCART_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = "http://localhost:5000"
    data_dir: Path = Path.home() / ".freshcart"
    request_timeout: float = 10.0

    razorpay_key_id: str = ""
    merchant_name: str = "NIVA Fruits"

    log_level: str = "WARNING"

    @property
    def storage_path(self) -> Path:
        return self.data_dir / "local_storage.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
