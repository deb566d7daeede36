"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        REFRESH_SESSION_EXPIRE_DAYS: int = 10

    settings = Settings()
    print(settings.MONGODB_URI)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    """

    # ==========================================================================
    # Database Settings
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "classbook"

    # ==========================================================================
    # Authentication Settings
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    # ==========================================================================
    # Server Settings
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # CORS Settings
    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=True,
    )

    def get_cors_origins(self) -> list:
        """Parse CORS_ORIGINS into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if not self.JWT_SECRET:
            errors.append("JWT_SECRET is required to sign access tokens")

        if self.JWT_ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
            errors.append("JWT_ACCESS_TOKEN_EXPIRE_MINUTES must be positive")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
