"""
Auth service — orchestrates register / login / current user.

Hashing happens here, explicitly, before the store is asked to insert; the
store never hashes on write.
"""

from __future__ import annotations

import asyncio
import logging

from auth.errors import AuthError, ConflictError
from auth.jwt import create_token
from auth.models import AuthContext, AuthResult, PublicUser
from auth.password import hash_password, validate_password, verify_password
from auth.store import USER_EXISTS, UserStore, validate_email, validate_username

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(self, store: UserStore) -> None:
        self.store = store

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create a user and return it with a fresh token."""
        username = validate_username(username)
        email = validate_email(email)
        validate_password(password)

        if await self.store.find_by_email_or_username(email, username) is not None:
            raise ConflictError(USER_EXISTS)

        password_hash = await asyncio.to_thread(hash_password, password)
        user = await self.store.create(username, email, password_hash)

        token = create_token(str(user.user_id))
        logger.info("Registered user %s (%s)", user.username, user.user_id)
        return AuthResult(user=PublicUser.model_validate(user), token=token)

    async def login(self, email: str, password: str) -> AuthResult:
        """Login with email + password."""
        user = await self.store.find_by_email(email)
        if user is None:
            raise AuthError(INVALID_CREDENTIALS)

        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            raise AuthError(INVALID_CREDENTIALS)

        token = create_token(str(user.user_id))
        logger.info("Login: %s (%s)", user.username, user.user_id)
        return AuthResult(user=PublicUser.model_validate(user), token=token)

    def get_current_user(self, context: AuthContext) -> PublicUser:
        return PublicUser.model_validate(context.user)
