"""
This module contains configuration settings for the application.
"""

from functools import lru_cache
from typing import Optional, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration using Pydantic BaseSettings.
    Values come from environment variables or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Application settings
    app_name: str = "SkyCast Weather Dashboard"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Upstream provider settings
    openweather_api_key: Optional[str] = None
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_icon_url: str = "https://openweathermap.org/img/wn/{icon}@2x.png"
    weather_api_timeout: int = 10
    weather_units: str = "metric"
    weather_lang: str = "id"

    # Dashboard settings
    enable_dashboard: bool = True
    default_city: str = "Jakarta"
    auto_refresh_interval: int = 600
    dashboard_reload_seconds: int = 60
    dashboard_api_base_url: str = "http://skycast.internal"
    display_timezone: str = "Asia/Jakarta"

    # CORS settings
    cors_origins: List[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings.
    """
    return Settings()
