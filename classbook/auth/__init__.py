"""
Auth System

Handles password credentials, access tokens, and refresh sessions embedded
in User documents.
"""

from classbook.auth.services.credential_store import CredentialStore
from classbook.auth.services.session_manager import SessionManager
from classbook.auth.middleware import AccessTokenAuthenticator, RefreshSessionAuthenticator

__all__ = [
    "CredentialStore",
    "SessionManager",
    "AccessTokenAuthenticator",
    "RefreshSessionAuthenticator",
]
