"""This module re-exports the User model from the database package for use in
authentication-related code, plus the public projection that leaves the store.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from database.models import User


class PublicUser(BaseModel):
    """The only view of a user that is ever serialized (no password hash)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(validation_alias="user_id")
    username: str
    email: str


@dataclass(frozen=True)
class AuthContext:
    """Resolved identity handed from the auth gate to a route handler."""

    user: User
    token: str


@dataclass(frozen=True)
class AuthResult:
    user: PublicUser
    token: str


__all__ = ["AuthContext", "AuthResult", "PublicUser", "User"]
