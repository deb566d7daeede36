"""
Classbook application settings.

Extends the base settings with Classbook-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Classbook-specific settings."""

    # ==========================================================================
    # Sessions
    # ==========================================================================
    # Lifetime of a refresh session
    REFRESH_SESSION_EXPIRE_DAYS: int = 10

    # Drop expired sessions from the user record on login
    PRUNE_EXPIRED_SESSIONS: bool = False

    # ==========================================================================
    # Passwords
    # ==========================================================================
    BCRYPT_ROUNDS: int = 10
    PASSWORD_MIN_LENGTH: int = 8


# Global settings instance
settings = Settings()
