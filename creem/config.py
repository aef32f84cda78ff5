"""
SDK Configuration Management

Loads configuration from environment variables (CREEM_ prefix) and an
optional .env file. Values passed explicitly to the client always win.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from creem import __version__


class Settings(BaseSettings):
    """SDK settings with validation"""

    model_config = SettingsConfigDict(
        env_prefix="CREEM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Level used by setup_logging()")

    # Credentials
    api_key: Optional[str] = Field(default=None, description="Creem API key")
    webhook_secret: Optional[str] = Field(
        default=None, description="Creem webhook signing secret"
    )

    # API
    test_mode: bool = Field(default=False, description="Use the test API host")
    api_base_url: str = Field(default="https://api.creem.io")
    test_api_base_url: str = Field(default="https://test-api.creem.io")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    user_agent: str = Field(default=f"creem-sdk-python/{__version__}")

    # Webhooks
    webhook_signature_header: str = Field(
        default="creem-signature",
        description="Header read by the FastAPI webhook route",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @property
    def base_url(self) -> str:
        """API host selected by test_mode"""
        return self.test_api_base_url if self.test_mode else self.api_base_url


@lru_cache()
def get_settings() -> Settings:
    """Get SDK settings (cached)."""
    return Settings()
