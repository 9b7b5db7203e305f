"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "GDM Risk Engine"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    audit_enabled: bool = True

    # API
    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    api_v1_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:4200"]


settings = Settings()
