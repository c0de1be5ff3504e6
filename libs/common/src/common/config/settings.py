"""Entity Resolution Configuration Settings."""

import os
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


def get_environment() -> Environment:
    """Detect environment from APP_ENV variable.

    Returns:
        Environment: Detected environment based on APP_ENV.

    Raises:
        ValueError: If APP_ENV is not set or contains an invalid value.
    """
    env_str = os.getenv("APP_ENV")
    if not env_str:
        raise ValueError(
            "APP_ENV environment variable must be set to one of: "
            "development, staging, production"
        )

    env_str = env_str.lower()

    match env_str:
        case "production":
            return Environment.PRODUCTION
        case "staging":
            return Environment.STAGING
        case "development":
            return Environment.DEVELOPMENT
        case _:
            raise ValueError(
                f"Invalid APP_ENV value '{env_str}'. "
                "Must be one of: development, staging, production"
            )


class Settings(BaseSettings):
    """Entity resolution settings with validation and type safety."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # ============================================================================
    # ENVIRONMENT & APPLICATION
    # ============================================================================

    environment: Environment = Field(
        default_factory=get_environment,
        description="Application environment (development/staging/production)",
    )
    debug: bool = Field(default=True, description="Log tracebacks for failures")

    # ============================================================================
    # DUPLICATE DETECTION THRESHOLDS
    # ============================================================================

    dedup_title_similarity_threshold: float = Field(
        default=0.92,
        ge=0.0,
        le=1.0,
        description="Edit-distance similarity at which two titles always match",
    )
    dedup_romanized_similarity_threshold: float = Field(
        default=0.86,
        ge=0.0,
        le=1.0,
        description="Relaxed similarity used when either title is romanized Japanese",
    )
    dedup_token_jaccard_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Core-token Jaccard overlap at which two titles match",
    )
    dedup_metadata_title_similarity_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Title similarity required alongside matching episodes/year/type",
    )
    dedup_episode_tolerance: int = Field(
        default=1, ge=0, description="Max episode count difference for corroboration"
    )
    dedup_year_tolerance: int = Field(
        default=1, ge=0, description="Max release year difference for corroboration"
    )

    # ============================================================================
    # LOGGING CONFIGURATION
    # ============================================================================

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    # ============================================================================
    # LIFECYCLE & VALIDATION
    # ============================================================================

    def model_post_init(self, __context) -> None:
        """Apply environment-specific overrides after initialization."""
        self.apply_environment_settings()

    def apply_environment_settings(self) -> None:
        """Apply environment-specific settings with smart defaults.

        DEVELOPMENT:
            - Sets debug=True, log_level=DEBUG as defaults
            - Respects user-provided values

        STAGING:
            - Sets debug=True, log_level=INFO as defaults
            - Respects user-provided values

        PRODUCTION (ENFORCED):
            - ALWAYS enforces debug=False, log_level=WARNING
        """
        if self.environment == Environment.DEVELOPMENT:
            if os.getenv("DEBUG") is None:
                self.debug = True
            if os.getenv("LOG_LEVEL") is None:
                self.log_level = "DEBUG"

        elif self.environment == Environment.STAGING:
            if os.getenv("DEBUG") is None:
                self.debug = True
            if os.getenv("LOG_LEVEL") is None:
                self.log_level = "INFO"

        elif self.environment == Environment.PRODUCTION:
            # ENFORCED - cannot be bypassed
            self.debug = False
            self.log_level = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
