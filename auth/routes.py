"""
User API routes — register, login, logout.

Route prefix: /api/user
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from api.errors import internal_error
from auth.dependencies import get_credential_store, get_current_user
from auth.service import CredentialStore
from database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["user"])


# ── Request / response schemas ─────────────────────────────────────────


class _CredentialsRequest(BaseModel):
    # register and login must clean input the same way or hashes won't match
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class RegisterRequest(_CredentialsRequest):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=6, max_length=72)


class LoginRequest(_CredentialsRequest):
    password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=UserResponse)
async def register(
    req: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> UserResponse:
    """Register a new user."""
    with internal_error("Registration failed"):
        user = await store.register(req.username, req.email, req.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> TokenResponse:
    """Login with email + password."""
    with internal_error("Login failed"):
        token = await store.login(req.email, req.password)
    return TokenResponse(token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: User = Depends(get_current_user),
    store: CredentialStore = Depends(get_credential_store),
) -> MessageResponse:
    with internal_error("Logout failed"):
        await store.logout(user)
    return MessageResponse(message="User logged out successfully")
