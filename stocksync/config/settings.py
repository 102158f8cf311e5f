"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RemoteSettings(BaseSettings):
    """Remote backend (PostgREST / Supabase) configuration."""

    model_config = SettingsConfigDict(env_prefix="REMOTE_")

    url: str = ""
    api_key: str = ""
    rest_path: str = "/rest/v1"
    timeout: float = 15.0

    # Connection probe retries (transport errors only)
    connect_retries: int = 3
    retry_delay: float = 0.5

    # Server-side collection names
    products_table: str = "products"
    movements_table: str = "movements"
    orders_table: str = "orders"

    # Startup settings
    connect_on_startup: bool = True

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.api_key)

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/") + self.rest_path


class StorageSettings(BaseSettings):
    """Local cache storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stocksync.db"

    # SQLite settings
    pool_size: int = 2
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class SyncSettings(BaseSettings):
    """Offline queue replay configuration."""

    model_config = SettingsConfigDict(env_prefix="SYNC_")

    drain_on_reconnect: bool = True
    refresh_after_drain: bool = True
    movement_fetch_limit: int = 200


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "StockSync"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
