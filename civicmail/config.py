"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./civicmail.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_name: str = Field(
        default="Consul",
        description="Platform name shown in email subjects",
        min_length=1,
    )
    base_url: str = Field(
        default="",
        description="Absolute origin prepended to generated links; empty keeps paths relative",
    )
    app_timezone: str = Field(
        default="Europe/Madrid",
        description="IANA timezone name (or UTC offset) used for stored timestamps",
    )
    mail_backend: Literal["sendgrid", "memory"] = Field(
        default="sendgrid",
        description="Transport used to deliver outgoing email",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    digest_max_workers: int = Field(
        default=4,
        description="Number of recipients processed concurrently by the async digest",
        ge=1,
    )
    notification_retention_days: int = Field(
        default=90,
        description="Days a pending notification may wait before it is expired",
        gt=0,
    )

    cors_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the API from a browser",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
