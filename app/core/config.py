"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, Twilio credentials, timings)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Constructed once at startup and handed to the engines that need it.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="nightlist",
        description="MongoDB database name"
    )

    # Twilio (fallback when admin settings carry no credentials)
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_FROM_PHONE: Optional[str] = Field(
        default=None,
        description="Twilio sender phone number (E.164)"
    )
    TWILIO_API_BASE_URL: str = Field(
        default="https://api.twilio.com/2010-04-01",
        description="Twilio REST API base URL"
    )

    # Notification functions
    NOTIFICATION_FUNCTIONS_URL: Optional[str] = Field(
        default=None,
        description="Remote SMS functions base URL (empty = run functions in-process)"
    )
    NOTIFICATION_FUNCTIONS_KEY: Optional[str] = Field(
        default=None,
        description="Bearer key sent to the remote SMS functions"
    )
    NOTIFICATION_TIMEOUT_SECONDS: float = Field(
        default=15.0,
        description="Timeout for calls to the remote SMS functions"
    )
    APP_URL: str = Field(
        default="http://localhost:8000",
        description="Public storefront origin (used in guest list share links)"
    )

    # Guest list enrollment
    RESEND_COOLDOWN_SECONDS: int = Field(
        default=30,
        description="Seconds before a verification code can be resent"
    )
    ENROLLMENT_FLOW_TTL_MINUTES: int = Field(
        default=30,
        description="Idle minutes before an enrollment flow is discarded"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Application secret key"
    )
    ADMIN_API_KEY: Optional[str] = Field(
        default=None,
        description="Shared key expected in the X-Admin-Key header on admin routes"
    )

    @validator("SECRET_KEY")
    def validate_secret_key(cls, v, values):
        """Ensure secret key is changed in production."""
        if values.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @validator("RESEND_COOLDOWN_SECONDS")
    def validate_cooldown(cls, v):
        if v < 0:
            raise ValueError("RESEND_COOLDOWN_SECONDS cannot be negative")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def uses_remote_functions(self) -> bool:
        """True when SMS functions are reached over HTTP instead of in-process."""
        return bool(self.NOTIFICATION_FUNCTIONS_URL)

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not config.APP_URL:
        errors.append("APP_URL is required")

    # Production-specific validations
    if config.is_production:
        if not config.ADMIN_API_KEY:
            errors.append("ADMIN_API_KEY is required in production")
        if config.uses_remote_functions and not config.NOTIFICATION_FUNCTIONS_KEY:
            errors.append("NOTIFICATION_FUNCTIONS_KEY is required with NOTIFICATION_FUNCTIONS_URL")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
