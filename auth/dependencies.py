"""
FastAPI dependencies for authentication.

Provides the store/service providers and ``get_auth_context``, the gate
used by every protected route.  The gate resolves the bearer token to a
live ``User`` and hands it to the handler as an explicit ``AuthContext``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.errors import AuthError
from auth.jwt import decode_token
from auth.models import AuthContext
from auth.service import AuthService
from auth.store import UserStore

logger = logging.getLogger(__name__)

GATE_REJECTION = "Please authenticate."

# auto_error=False so a missing header reaches the gate and gets the same 401
_bearer_scheme = HTTPBearer(auto_error=False)


def extract_bearer(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    """Return the raw token from parsed ``Authorization: Bearer`` credentials."""
    token = credentials.credentials.strip() if credentials is not None else ""
    if not token:
        raise AuthError("no token")
    return token


async def authenticate(token: Optional[str], store: UserStore) -> AuthContext:
    """
    Resolve a raw bearer token to an ``AuthContext``.

    Signature and expiry are checked before the store is touched.
    """
    if not token:
        raise AuthError("no token")
    claims = decode_token(token)
    user = await store.find_by_id(claims.sub)
    if user is None:
        raise AuthError("user not found")
    return AuthContext(user=user, token=token)


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_auth_service(store: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(store)


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    store: UserStore = Depends(get_user_store),
) -> AuthContext:
    """
    Gate dependency.  Every rejection reason collapses to the same 401 so
    callers cannot tell a bad token from a deleted account.
    """
    try:
        return await authenticate(extract_bearer(credentials), store)
    except AuthError as exc:
        logger.debug("Auth gate rejected request: %s", exc.message)
        raise AuthError(GATE_REJECTION) from exc
