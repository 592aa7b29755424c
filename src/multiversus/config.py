"""
Configuration management for the MultiVersus client using pydantic-settings.

Environment variables are loaded from .env file and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .api.endpoints import DEFAULT_AUTH_PROVIDER, DEFAULT_USER_AGENT, HYDRA_BASE_URL


class HydraSettings(BaseSettings):
    """Backend credentials and connection settings."""

    api_key: SecretStr = Field(default=SecretStr(""), description="Hydra API key")
    client_id: str = Field(default="", description="Hydra client id")
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="Value of x-hydra-user-agent"
    )
    base_url: str = Field(default=HYDRA_BASE_URL, description="Backend base URL")
    timeout: float = Field(
        default=30.0, gt=0, le=300, description="Request timeout in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="HYDRA_")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined with a leading slash."""
        return v.rstrip("/")


class SteamSettings(BaseSettings):
    """Platform ticket used for the token exchange."""

    ticket: SecretStr = Field(
        default=SecretStr(""), description="Hex-encoded platform auth ticket"
    )
    provider: str = Field(
        default=DEFAULT_AUTH_PROVIDER, description="Auth provider key for the exchange"
    )

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    @property
    def has_ticket(self) -> bool:
        """Check if a ticket is configured."""
        return bool(self.ticket.get_secret_value().strip())


class AppSettings(BaseSettings):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    model_config = SettingsConfigDict(env_prefix="")


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    hydra: HydraSettings = Field(default_factory=HydraSettings)
    steam: SteamSettings = Field(default_factory=SteamSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    def validate_credentials(self) -> bool:
        """Check if API key, client id and ticket are configured."""
        return (
            bool(self.hydra.api_key.get_secret_value())
            and bool(self.hydra.client_id)
            and self.steam.has_ticket
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    from dotenv import load_dotenv

    # Try to find and load .env from project root
    env_paths = [
        Path(".env"),
        Path(__file__).parent.parent.parent / ".env",
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=True)
            break

    return Settings()
