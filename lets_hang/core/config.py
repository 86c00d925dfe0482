"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Let's Hang"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./lets_hang.db"

    # Hangs
    default_max_attendees: int = 10
    code_length: int = 6
    max_code_attempts: int = 20

    # Per-client state
    client_cookie_name: str = "lets_hang_client"
    view_state_cache_size: int = 1024
    view_state_ttl_seconds: int = 60 * 60 * 24

    # Archival of past hangs
    archive_interval_minutes: int = 15


settings = Settings()
