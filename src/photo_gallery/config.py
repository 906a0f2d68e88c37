"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    platform_profile: str = "rich"
    data_dir: str = "data"
    photo_storage_key: str = "photos"
    kv_backend: str = "file"
    kv_file: str = "preferences.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_kv_table: str = "kv_store"
    camera_base_url: str = "http://localhost:8090"
    camera_quality: int = 100
    webview_server_url: str = "capacitor://localhost"
    http_timeout_seconds: float = 20.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
