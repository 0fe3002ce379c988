"""
FastAPI dependencies for authentication.

Provides the service handles built by ``create_app`` and the
``get_current_user`` guard used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import internal_error
from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.service import CredentialStore
from database.models import User
from database.session import get_db_session
from exceptions import AuthError, TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_credential_store(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> CredentialStore:
    return CredentialStore(session, hasher, tokens)


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    store: CredentialStore = Depends(get_credential_store),
) -> User:
    """
    Resolve the caller from ``Authorization: Bearer <token>``.

    Checks run in a fixed order (header present, Bearer scheme, token
    signature/expiry, user exists); the first failure decides the 401
    message.
    """
    if not authorization:
        raise AuthError("Access denied. No token provided.")

    parts = authorization.split(" ")
    if parts[0] != "Bearer":
        raise AuthError("Invalid token. Token must be of the Bearer type.")
    token = parts[1] if len(parts) > 1 else ""

    try:
        user_id = store.tokens.verify(token)
    except TokenExpiredError:
        logger.debug("Rejected expired token on %s", request.url.path)
        raise
    except TokenInvalidError as exc:
        logger.debug("Rejected token on %s: %s", request.url.path, exc.details)
        raise

    with internal_error("Authentication failed"):
        user = await store.get_user(user_id)
    if user is None:
        raise AuthError("Invalid token. User not found.")

    request.state.user = user
    return user
