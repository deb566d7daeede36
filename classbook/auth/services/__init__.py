"""Auth services."""

from classbook.auth.services.credential_store import CredentialStore
from classbook.auth.services.session_manager import SessionManager

__all__ = [
    "CredentialStore",
    "SessionManager",
]
