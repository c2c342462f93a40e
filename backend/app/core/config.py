"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Market Snapshot API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["*"]

    # Provider behaviour
    provider_timeout_seconds: float = 10.0
    default_api_key: str = "demo"  # Used when a request carries no key for a provider
    binance_kline_limit: int = 200
    twelvedata_outputsize: int = 200
    history_length: int = 50  # Closes returned in historicalData

    # Provider endpoints
    binance_base_url: str = "https://api.binance.com/api/v3"
    twelvedata_base_url: str = "https://api.twelvedata.com"
    fixer_base_url: str = "https://api.fixer.io"
    exchangerate_base_url: str = "https://api.exchangerate-api.com/v4"
    metals_base_url: str = "https://metals-api.com/api"
    alphavantage_base_url: str = "https://www.alphavantage.co"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
