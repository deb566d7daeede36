"""
Errors raised by the token and password primitives.

These are framework-agnostic; the application layer decides which HTTP
status each one maps to.
"""


class HashingError(RuntimeError):
    """Password hashing failed inside the underlying library."""


class TokenSigningError(RuntimeError):
    """An access token could not be signed (e.g. no secret configured)."""


class InvalidTokenError(ValueError):
    """An access token is malformed, has a bad signature, or is expired."""


class TokenExpiredError(InvalidTokenError):
    """An access token was well-formed but its expiry has passed."""
