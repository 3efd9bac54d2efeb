"""Application configuration."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite:///./wealthvue.db"

    # Asset extraction (Gemini)
    gemini_api_key: str = ""
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_models: list[str] = [
        "gemini-3-flash-preview",
        "gemini-2.5-flash-lite",
        "gemini-2.5-flash",
    ]
    gemini_timeout_seconds: float = 60.0

    # Exchange rates
    fx_api_url: str = "https://api.frankfurter.app"
    fx_cache_ttl_seconds: int = 3600
    fx_fetch_timeout_seconds: float = 10.0

    # Live prices
    price_refresh_workers: int = 8

    # Analytics
    archetype_variant: Literal["investable", "classic"] = "investable"
    default_display_currency: str = "USD"

    # Application
    log_level: str = "INFO"
    debug: bool = False
    sql_echo: bool = False

    # CORS
    allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


settings = Settings()
