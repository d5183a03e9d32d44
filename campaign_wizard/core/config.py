"""
Core configuration settings for the Campaign Wizard.

Uses Pydantic Settings for environment-based configuration management.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Wizard settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CAMPAIGN_WIZARD_",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Info
    PROJECT_NAME: str = "Campaign Wizard"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    @field_validator("DEBUG", mode="before")
    @classmethod
    def parse_debug(cls, v):
        """Parse debug flag from environment."""
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return v

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    # Validation rules
    MIN_DESCRIPTION_LENGTH: int = 10

    # Timeline hints (presentation only, never enforced by step validation)
    MIN_CAMPAIGN_DURATION_DAYS: int = 14
    RECOMMENDED_CAMPAIGN_DURATION_MONTHS: int = 1
    AUTOFILL_COMPLETION_DATE: bool = True

    # Best-effort draft save when the wizard is closed
    CLOSE_SAVE_MAX_ATTEMPTS: int = 3
    CLOSE_SAVE_BASE_DELAY: float = 0.5
    CLOSE_SAVE_MAX_DELAY: float = 5.0

    # Campaigns API (HTTP persistence adapter)
    CAMPAIGNS_API_URL: str = "http://localhost:3000"
    CAMPAIGNS_API_KEY: Optional[str] = None
    CAMPAIGNS_API_TIMEOUT: float = 30.0


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance - useful for dependency injection."""
    return settings
