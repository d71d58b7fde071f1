"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
Verification is pure in-memory work: no database access happens here.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import secrets
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from typing import Optional

from auth.errors import AuthError
from config.settings import config

_TOKEN_SECRET = config.jwt_secret
_TOKEN_EXPIRY_SECONDS = config.jwt_expiry_seconds

INVALID_TOKEN = "invalid or expired token"


@dataclass(frozen=True)
class TokenClaims:
    sub: str
    iat: int
    exp: int
    jti: str


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: str,
    *,
    issued_at: Optional[int] = None,
    secret: Optional[str] = None,
) -> str:
    """Create a signed token containing ``user_id``, issue time and expiry."""
    iat = int(time.time()) if issued_at is None else issued_at
    payload = {
        "sub": str(user_id),
        "iat": iat,
        "exp": iat + _TOKEN_EXPIRY_SECONDS,
        "jti": secrets.token_hex(8),
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    sig = _sign(raw, secret or _TOKEN_SECRET)
    return urlsafe_b64encode(raw).decode().rstrip("=") + "." + sig


def decode_token(
    token: str,
    *,
    now: Optional[float] = None,
    secret: Optional[str] = None,
) -> TokenClaims:
    """
    Verify signature and expiry, returning the token's claims.

    Raises ``AuthError`` on bad format, signature mismatch, malformed
    payload or a past expiry.
    """
    parts = token.split(".") if isinstance(token, str) else []
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise AuthError(INVALID_TOKEN)
    encoded, sig = parts

    try:
        raw = urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
    except (binascii.Error, ValueError) as exc:
        raise AuthError(INVALID_TOKEN) from exc

    expected_sig = _sign(raw, secret or _TOKEN_SECRET)
    if not hmac.compare_digest(sig.encode(), expected_sig.encode()):
        raise AuthError(INVALID_TOKEN)

    try:
        payload = json.loads(raw)
        claims = TokenClaims(
            sub=str(payload["sub"]),
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
            jti=str(payload.get("jti", "")),
        )
    except (ValueError, TypeError, KeyError) as exc:
        raise AuthError(INVALID_TOKEN) from exc

    current = time.time() if now is None else now
    if claims.exp <= current:
        raise AuthError(INVALID_TOKEN)
    return claims
