"""
Configuration settings for Resend CLI.

This module provides configuration management using Pydantic settings
with support for environment variables and .env files.
"""

from typing import Optional, Dict, Any
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://api.resend.com"
CREDENTIALS_FILE_NAME = "credentials"


class ResendCliSettings(BaseSettings):
    """
    Main configuration settings for Resend CLI.

    Settings are loaded from multiple sources in order of preference:
    1. Environment variables (prefixed with RESEND_CLI_)
    2. .env file in the working directory
    3. Default values

    The API key itself normally lives in the credentials file managed by
    ``CredentialStore``; ``api_key`` here only overrides it.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESEND_CLI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_key: Optional[str] = Field(
        default=None,
        description="Resend API key, overrides the stored credentials"
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Resend API"
    )

    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        gt=0
    )

    # Directory Configuration
    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "resend-cli",
        description="Configuration directory path"
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate the API base URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base URL '{v}'. It must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    @property
    def credentials_path(self) -> Path:
        """Path to the file holding the saved API key."""
        return self.config_dir / CREDENTIALS_FILE_NAME

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary, excluding sensitive data."""
        data = self.model_dump()
        if data.get("api_key"):
            data["api_key"] = "***masked***"
        return data
