"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

from typing import Optional

import bcrypt

from auth.errors import HashFormatError, ValidationError
from config.settings import config

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128
# bcrypt only reads the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


def validate_password(password: str) -> str:
    """Raise ``ValidationError`` unless ``password`` is usable as a secret."""
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if len(password) > MAX_PASSWORD_LENGTH or len(password.encode()) > _BCRYPT_MAX_BYTES:
        raise ValidationError("Password is too long")
    return password


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt (auto-salted, work factor from config)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    Returns ``False`` on mismatch.  Raises ``HashFormatError`` when
    ``password_hash`` is not a bcrypt hash at all.
    """
    if len(password.encode()) > _BCRYPT_MAX_BYTES:
        # never accepted by validate_password, so it cannot match
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError, AttributeError) as exc:
        raise HashFormatError("Stored password hash is not a valid bcrypt hash") from exc
