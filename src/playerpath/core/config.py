"""Notifier settings.

Every value can be set through a `PLAYERPATH_`-prefixed environment variable
or a `.env` file, e.g. `PLAYERPATH_EMAIL_API_KEY=re_...`. Settings are read
once per process by get_settings().
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated notifier settings."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYERPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "PlayerPath Notifier"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Invitation store
    database_url: str = "sqlite+aiosqlite:///./pp_data/playerpath.db"
    db_echo: bool = False
    # Pool options, ignored for SQLite
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600

    # Caller identity tokens
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="HS256 key shared with the identity provider",
    )
    access_token_expire_minutes: int = 60

    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:8000"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Email delivery; without an API key every dispatch fails as "not configured"
    email_api_key: str | None = Field(default=None, description="Resend API key")
    email_from_address: str = "noreply@playerpath.app"
    email_from_name: str = "PlayerPath"
    email_reply_to: str | None = None

    # Invitation links and the collection whose creations trigger an email
    invitation_link_scheme: str = "playerpath"
    invitation_web_domain: str = "playerpath.app"
    invitations_collection: str = "coach_invitations"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        """Accept a comma-separated string as well as a list."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("email_api_key", mode="before")
    @classmethod
    def blank_api_key_is_unset(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def single_worker_for_sqlite(self) -> "Settings":
        """SQLite cannot be shared between worker processes."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                f"SQLite does not support multiple worker processes (workers={self.workers}); "
                "run with a single worker or use PostgreSQL."
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def email_configured(self) -> bool:
        return self.email_api_key is not None


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read on first use."""
    return Settings()
