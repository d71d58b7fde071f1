"""
Error taxonomy for the auth core.

Every error carries an ``ErrorKind`` so callers (and the HTTP layer) branch
on the kind rather than on message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    CONFLICT = "conflict_error"
    AUTH = "auth_error"
    HASH_FORMAT = "hash_format_error"


class AuthServiceError(Exception):
    kind: ErrorKind
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AuthServiceError):
    """Malformed input: field length or format."""

    kind = ErrorKind.VALIDATION
    status_code = 400


class ConflictError(AuthServiceError):
    """Username or email already taken."""

    kind = ErrorKind.CONFLICT
    status_code = 400


class AuthError(AuthServiceError):
    """Bad credentials, bad or expired token, or unknown token subject."""

    kind = ErrorKind.AUTH
    status_code = 401


class HashFormatError(AuthServiceError):
    """Stored password hash is not one this service produced."""

    kind = ErrorKind.HASH_FORMAT
    status_code = 500
