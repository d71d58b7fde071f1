"""
Credential store — persistence for ``User`` rows.

Uniqueness of ``username`` and ``email`` is enforced by the table's unique
indexes; ``create`` turns a violation into ``ConflictError`` so a registration
that loses a check-then-create race fails instead of overwriting.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.errors import ConflictError, ValidationError
from auth.models import User

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 64
MAX_EMAIL_LENGTH = 255
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$")
USER_EXISTS = "User with this email or username already exists"


def normalize_username(username: str) -> str:
    return username.strip() if isinstance(username, str) else ""


def normalize_email(email: str) -> str:
    return email.strip().lower() if isinstance(email, str) else ""


def validate_username(username: str) -> str:
    """Return the trimmed username or raise ``ValidationError``."""
    value = normalize_username(username)
    if not value:
        raise ValidationError("Username is required")
    if len(value) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters long"
        )
    if len(value) > MAX_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be at most {MAX_USERNAME_LENGTH} characters long"
        )
    return value


def validate_email(email: str) -> str:
    """Return the trimmed, lower-cased email or raise ``ValidationError``."""
    value = normalize_email(email)
    if not value:
        raise ValidationError("Email is required")
    if len(value) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(value):
        raise ValidationError("Please enter a valid email")
    return value


class UserStore:
    """Async lookups and inserts against the ``users`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        email = normalize_email(email)
        username = normalize_username(username)
        async with self._session_factory() as session:
            result = await session.execute(
                select(User)
                .where(or_(User.email == email, User.username == username))
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(User).where(User.email == normalize_email(email))
            )
            return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        try:
            uid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
        except ValueError:
            return None
        async with self._session_factory() as session:
            return await session.get(User, uid)

    async def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Raises ``ValidationError`` for bad fields and ``ConflictError`` when
        the username or email is already taken.
        """
        username = validate_username(username)
        email = validate_email(email)
        if not password_hash:
            raise ValidationError("Password is required")

        user = User(
            user_id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
        )
        async with self._session_factory() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                logger.info("Rejected duplicate registration for %s", username)
                raise ConflictError(USER_EXISTS) from exc
        return user
