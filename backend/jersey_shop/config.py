"""Application configuration helpers."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Centralized configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=str(BASE_DIR / ".env"), env_file_encoding="utf-8")

    app_name: str = "AK Jersey Shop API"
    environment: str = "dev"
    log_level: str = "INFO"

    # Database connection pieces; DATABASE_URL wins when set
    database_url: Optional[str] = None
    pg_host: str = "localhost"
    pg_port: int = 5432
    pg_db: str = "jersey_shop"
    pg_user: str = "jersey"
    pg_password: str = "secret"
    pg_sslmode: str = "prefer"

    # Shop locale
    timezone: str = "Asia/Jakarta"
    week_start: int = Field(6, ge=0, le=6, description="0=Monday ... 6=Sunday")

    # Receipts and settings defaults
    default_shop_name: str = "AK Jersey"
    default_receipt_template: str = "Terima kasih atas pesanan Anda!"
    receipt_width: int = Field(32, ge=24, le=64)

    # API behavior
    allow_origins: List[str] = ["http://localhost:5173", "http://localhost:3000", "*"]

    def get_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.pg_user}:{self.pg_password}"
            f"@{self.pg_host}:{self.pg_port}/{self.pg_db}?sslmode={self.pg_sslmode}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
