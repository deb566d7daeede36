"""
FastAPI dependencies for Classbook application.

Provides dependency injection for all services.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import (
    PasswordHasher,
    TokenIssuer,
    create_auth_dependency,
)
from classbook.config import Settings
from classbook.auth.services.credential_store import CredentialStore
from classbook.auth.services.session_manager import SessionManager
from classbook.auth.middleware import AccessTokenAuthenticator, RefreshSessionAuthenticator
from classbook.services.student_service import StudentService
from classbook.services.classroom_service import ClassroomService


_settings: Optional[Settings] = None
_token_issuer: Optional[TokenIssuer] = None
_credential_store: Optional[CredentialStore] = None
_session_manager: Optional[SessionManager] = None
_access_authenticator: Optional[AccessTokenAuthenticator] = None
_refresh_authenticator: Optional[RefreshSessionAuthenticator] = None
_student_service: Optional[StudentService] = None
_classroom_service: Optional[ClassroomService] = None


def init_all_services(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    token_issuer: Optional[TokenIssuer] = None,
    session_manager: Optional[SessionManager] = None,
) -> None:
    """
    Initialize all services with database and settings.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        settings: Application settings
        token_issuer: Pre-built token issuer (tests inject one with a fixed clock)
        session_manager: Pre-built session manager (same)
    """
    global _settings, _token_issuer, _credential_store, _session_manager
    global _access_authenticator, _refresh_authenticator
    global _student_service, _classroom_service

    _settings = settings

    _token_issuer = token_issuer or TokenIssuer(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    _credential_store = CredentialStore(
        db=db,
        password_hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        min_password_length=settings.PASSWORD_MIN_LENGTH,
    )

    _session_manager = session_manager or SessionManager(
        db=db,
        token_issuer=_token_issuer,
        expiration_days=settings.REFRESH_SESSION_EXPIRE_DAYS,
    )

    _access_authenticator = AccessTokenAuthenticator(token_issuer=_token_issuer)
    _refresh_authenticator = RefreshSessionAuthenticator(session_manager=_session_manager)

    _student_service = StudentService(db)
    _classroom_service = ClassroomService(db)


def _require(service, name: str):
    if service is None:
        raise RuntimeError(f"{name} not initialized. Call init_all_services first.")
    return service


def get_settings() -> Settings:
    """Get application settings."""
    return _require(_settings, "Settings")


def get_token_issuer() -> TokenIssuer:
    """Get token issuer instance."""
    return _require(_token_issuer, "TokenIssuer")


def get_credential_store() -> CredentialStore:
    """Get credential store instance."""
    return _require(_credential_store, "CredentialStore")


def get_session_manager() -> SessionManager:
    """Get session manager instance."""
    return _require(_session_manager, "SessionManager")


def get_access_authenticator() -> AccessTokenAuthenticator:
    return _require(_access_authenticator, "AccessTokenAuthenticator")


def get_refresh_authenticator() -> RefreshSessionAuthenticator:
    return _require(_refresh_authenticator, "RefreshSessionAuthenticator")


def get_student_service() -> StudentService:
    """Get student service instance."""
    return _require(_student_service, "StudentService")


def get_classroom_service() -> ClassroomService:
    """Get classroom service instance."""
    return _require(_classroom_service, "ClassroomService")


# =============================================================================
# Route guards
# =============================================================================
# Usage:
#     @router.get("/students")
#     async def list_students(auth: Annotated[AuthContext, Depends(require_access_token)]):
#         ...

require_access_token = create_auth_dependency(get_access_authenticator)
require_refresh_session = create_auth_dependency(get_refresh_authenticator)
