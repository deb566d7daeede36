"""
Password validation.

Checks applied to a plaintext password before it is hashed. There is no
upper bound: the hasher pre-hashes with SHA-256, so bcrypt's 72-byte input
limit never applies.

Example:
    from common.utils import validate_password

    is_valid, errors = validate_password("short")
    if not is_valid:
        raise ValidationError(message=errors[0], code="INVALID_PASSWORD")
"""

from typing import List, Tuple


def validate_password(password: str, min_length: int = 8) -> Tuple[bool, List[str]]:
    """
    Validate a plaintext password.

    Args:
        password: The password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid: bool, errors: List[str])

    Examples:
        >>> validate_password("short")
        (False, ['Password must be at least 8 characters'])

        >>> validate_password("longenough")
        (True, [])
    """
    errors: List[str] = []

    if not isinstance(password, str) or len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters")

    return len(errors) == 0, errors
