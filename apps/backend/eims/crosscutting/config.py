"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Build narrow snapshots (auth, OTP, pagination) for the components that need them

Collaborators:
  - api/main.py: reads settings for CORS, logging and startup seeding
  - container.py: selects in-memory or PostgreSQL stores
  - identity/auth_users.py: receives AuthSettings through a dependency
  - application/usecases/auth: receive OtpSettings from the container

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - get_settings() is cached; components receive settings explicitly
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TEST_ENVIRONMENTS = frozenset({"test", "testing", "ci"})


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/production/test)
        allowed_origins: Comma-separated CORS origins (frontend URLs)
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        jwt_secret: Secret for signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        otp_length: Digits per one-time passcode (default: 6)
        otp_ttl_seconds: Seconds an OTP stays valid (default: 600)
        otp_max_attempts: Wrong guesses tolerated per OTP (default: 5)
        default_page_size: Page size for course browsing (default: 10)
        max_page_size: Upper bound for page size (default: 100)
        log_level: Root log level (default: INFO)
        log_json: Emit JSON logs (default: True)
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:5173"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60

    # Security - One-time passcodes
    otp_length: int = 6
    otp_ttl_seconds: int = 600
    otp_max_attempts: int = 5

    # Course browsing
    default_page_size: int = 10
    max_page_size: int = 100

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = "admin"
    dev_seed_admin_name: str = "Admin"
    dev_seed_admin_department: str = "Administration"
    dev_seed_admin_force_reset: bool = False

    @field_validator("otp_length")
    @classmethod
    def otp_length_in_range(cls, v: int) -> int:
        if v < 4 or v > 10:
            raise ValueError("otp_length must be between 4 and 10")
        return v

    @field_validator("otp_ttl_seconds", "otp_max_attempts", "jwt_access_ttl_minutes")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_page_sizes(self):
        if self.default_page_size <= 0 or self.max_page_size <= 0:
            raise ValueError("page sizes must be greater than 0")
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) must not exceed "
                f"max_page_size ({self.max_page_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
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
        return self.app_env.strip().lower() == "production"

    def uses_in_memory_store(self) -> bool:
        return self.app_env.strip().lower() in TEST_ENVIRONMENTS

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
