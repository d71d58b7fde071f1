"""
Auth API routes — register, login, me.

Route prefix: /auth
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from auth.dependencies import get_auth_context, get_auth_service
from auth.models import AuthContext, PublicUser
from auth.service import AuthService

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    user: PublicUser
    token: str


class MeResponse(BaseModel):
    user: PublicUser


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user."""
    result = await service.register(req.username, req.email, req.password)
    return AuthResponse(user=result.user, token=result.token)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with email + password."""
    result = await service.login(req.email, req.password)
    return AuthResponse(user=result.user, token=result.token)


@router.get("/me", response_model=MeResponse)
async def me(
    context: AuthContext = Depends(get_auth_context),
    service: AuthService = Depends(get_auth_service),
) -> MeResponse:
    """Return the user the bearer token belongs to."""
    return MeResponse(user=service.get_current_user(context))
