"""Application settings and configuration.

This module defines all configuration options for the hit counter service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from nacl import pwhash
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Hit Counter", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    # Key-value store
    store_backend: Literal["redis", "memory"] = Field(default="redis", alias="STORE_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    redis_password: str | None = Field(default=None, alias="REDIS_PASSWORD")
    redis_socket_timeout: float = Field(default=5.0, alias="REDIS_SOCKET_TIMEOUT")
    redis_connect_timeout: float = Field(default=5.0, alias="REDIS_CONNECT_TIMEOUT")

    # Admin secret gating account registration; falls back to the
    # pre-provisioned ``admin_pass`` key when unset.
    admin_secret: str | None = Field(default=None, alias="ADMIN_SECRET")

    # Argon2id work factors for account secrets
    pwhash_opslimit: int = Field(
        default=pwhash.argon2id.OPSLIMIT_INTERACTIVE,
        alias="PWHASH_OPSLIMIT",
    )
    pwhash_memlimit: int = Field(
        default=pwhash.argon2id.MEMLIMIT_INTERACTIVE,
        alias="PWHASH_MEMLIMIT",
    )

    # CORS configuration for embedding counters in third-party pages
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()
