"""Application settings and configuration.

This module defines all configuration options for the Wallet Auth service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

StorageBackend = Literal["memory", "redis", "sql"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files. Field
    names are accepted as well as their environment aliases, which lets tests
    build an isolated instance with ``Settings(storage_backend="memory")``.
    """

    # Application metadata
    app_name: str = Field(default="Wallet Auth", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # Durable key-value storage
    storage_backend: StorageBackend = Field(default="memory", alias="STORAGE_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")
    database_url: str = Field(default="sqlite:///./wallet_auth.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Namespaces keep nonce records and password accounts apart in one store
    nonce_namespace: str = Field(default="nonces", alias="NONCE_NAMESPACE")
    account_namespace: str = Field(default="auth", alias="ACCOUNT_NAMESPACE")

    # JWT settings for the username/password variant
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_seconds: int = Field(default=10, alias="ACCESS_TOKEN_EXPIRE_SECONDS")

    # CORS configuration for browser wallets
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "HEAD", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")
    cors_max_age: int = Field(default=86_400, alias="CORS_MAX_AGE")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_sqlite(self) -> bool:
        """Return True when the SQL backend points at a SQLite database."""
        return self.database_url.startswith("sqlite")


settings = Settings()
