from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Application
    app_name: str = "TinyLink"
    app_version: str = "1.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Database
    database_url: str = "sqlite:///./tinylink.db"

    # Externally visible base URL used to build short_url.
    # When unset it falls back to http://localhost:<port>
    base_url: Optional[str] = None

    # Short code generation
    code_length: int = 6
    max_retries: int = 5

    # Dashboard client
    dashboard_api_url: Optional[str] = None
    dashboard_poll_interval: float = 1.0

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @model_validator(mode="after")
    def fill_base_url(self) -> "Settings":
        if not self.base_url:
            self.base_url = f"http://localhost:{self.port}"
        self.base_url = self.base_url.rstrip("/")
        if not self.dashboard_api_url:
            self.dashboard_api_url = self.base_url
        return self


# Create settings instance
settings = Settings()
