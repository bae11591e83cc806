"""Application configuration with validation."""

from enum import Enum
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_JWT_SECRET = "dev-insecure-key-change-me"


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings read from the environment (or ``.env``).

    Validation rejects wildcard CORS and unknown log levels up front;
    production-only checks live in ``validate_production_config``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./deckvault.db",
        description="Database connection URL"
    )
    # Pool tuning applies to PostgreSQL only.
    db_pool_size: int = Field(default=5, description="Persistent database connections")
    db_max_overflow: int = Field(default=10, description="Extra connections during bursts")
    db_pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    db_pool_recycle: int = Field(default=1800, description="Seconds before a connection is recycled")

    # Authentication (token verification only; issuance happens elsewhere)
    jwt_secret_key: str = Field(
        default=_INSECURE_JWT_SECRET,
        description="JWT signing secret (override in production)"
    )
    jwt_algorithm: str = Field(default="HS256")

    # Full-text search engine (Meilisearch-compatible HTTP API)
    search_url: str = Field(
        default="",
        description="Search engine base URL (empty = search disabled)"
    )
    search_api_key: str = Field(default="", description="Search engine API key")
    search_index: str = Field(default="slides", description="Index holding slide documents")
    search_timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout for search engine calls"
    )

    rate_limit_per_minute: int = Field(
        default=120,
        description="Maximum requests per client per minute (0 = unlimited)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """Parse the comma-separated origin list, refusing wildcards."""
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in CORS_ALLOWED_ORIGINS"
            )
        return origins

    @property
    def search_configured(self) -> bool:
        return bool(self.search_url and self.search_api_key)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in ("json", "text"):
            raise ValueError("Invalid log format. Must be 'json' or 'text'")
        return v_lower

    def validate_production_config(self) -> List[str]:
        """Check security-critical settings.

        Returns the list of problems found. In production any problem is
        fatal and raises ``ConfigurationError``; in development the caller
        logs them as warnings.
        """
        problems: list[str] = []

        if self.jwt_secret_key == _INSECURE_JWT_SECRET:
            problems.append(
                "JWT_SECRET_KEY is using the default insecure value. "
                "Generate a secure key: openssl rand -hex 32"
            )

        localhost_origins = [
            o for o in self.get_cors_origins() if "localhost" in o or "127.0.0.1" in o
        ]
        if localhost_origins:
            problems.append(
                f"CORS allows localhost origins: {localhost_origins}. "
                "Remove localhost origins for production."
            )

        if not self.search_configured:
            problems.append(
                "SEARCH_URL / SEARCH_API_KEY are not set. Slide search will be unavailable."
            )

        if problems and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(problems)
            )
        return problems


settings = Settings()
