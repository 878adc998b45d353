"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Own the single signing-secret policy (no fallback secret)

Collaborators:
  - main.py: reads settings for CORS, lifespan and pool setup
  - container.py: reads settings for token, hashing and QR services
  - infrastructure/db/pool.py: pool sizes and timeouts

Constraints:
  - No business logic, pure configuration
  - JWT_SECRET and DATABASE_URL have no defaults; a missing value fails startup

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# R: Secrets that shipped as hardcoded fallbacks in earlier deployments
KNOWN_WEAK_SECRETS = {
    "fallbacksecret123",
    "smartpass2025supersecret",
    "dev-secret",
    "changeme",
    "change-me",
    "secret",
    "password",
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        jwt_secret: Secret for signing bearer tokens (required)
        jwt_expires_days: Token lifetime in days (default: 7)
        bcrypt_rounds: bcrypt cost factor (default: 10)
        app_env: development | test | production
        host: Bind address for the ASGI server
        port: Listening port (default: 3000)
        allowed_origins: Comma-separated CORS origins
        public_app_url: Base URL embedded in employee QR payloads
        allow_open_registration: Accept unauthenticated user creation
        db_pool_min_size: Minimum pooled connections
        db_pool_max_size: Maximum pooled connections
        db_pool_timeout_seconds: Max wait to acquire a pooled connection
        db_statement_timeout_ms: Per-statement timeout (0 disables)
        max_body_bytes: Max request body size (default: 1 MiB)
        log_level: Root log level for the app logger
    """

    # Required (no defaults)
    database_url: str
    jwt_secret: str

    # Environment
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Security - JWT Auth
    jwt_expires_days: int = 7

    # Security - Password hashing
    bcrypt_rounds: int = 10

    # Users
    allow_open_registration: bool = False

    # QR payloads point at the public employee page of the web app
    public_app_url: str = "http://localhost:3000"

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 5.0
    db_statement_timeout_ms: int = 5000

    # Security - Hardening
    max_body_bytes: int = 1024 * 1024  # 1MiB

    # Logging
    log_level: str = "INFO"

    @field_validator("jwt_secret")
    @classmethod
    def jwt_secret_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_SECRET must be set")
        return v.strip()

    @field_validator("jwt_expires_days")
    @classmethod
    def jwt_expires_days_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_expires_days must be greater than 0")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def bcrypt_rounds_in_range(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @field_validator("app_env")
    @classmethod
    def app_env_normalized(cls, v: str) -> str:
        return (v or "development").strip().lower()

    @field_validator("public_app_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_pool_sizes(self):
        if self.db_pool_min_size < 0:
            raise ValueError("db_pool_min_size must be >= 0")
        if self.db_pool_max_size < max(1, self.db_pool_min_size):
            raise ValueError(
                f"db_pool_max_size ({self.db_pool_max_size}) must be >= "
                f"db_pool_min_size ({self.db_pool_min_size}) and >= 1"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        if self.jwt_secret.lower() in KNOWN_WEAK_SECRETS:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_test(self) -> bool:
        return self.app_env in {"test", "testing"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
