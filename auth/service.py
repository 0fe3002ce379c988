"""
CredentialStore — user records, password checks and token issuance.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenService
from auth.password import PasswordHasher
from database.models import User
from exceptions import (
    AlreadyExistsError,
    InvalidCredentialsError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


class CredentialStore:
    """Per-request facade over the ``users`` table."""

    def __init__(
        self,
        session: AsyncSession,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.session = session
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, email: str, password: str) -> User:
        """Create a user; the password is stored only as a bcrypt hash."""
        result = await self.session.execute(
            select(User).where(or_(User.email == email, User.username == username))
        )
        if result.scalars().first() is not None:
            raise AlreadyExistsError()

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            # lost a race against a concurrent registration
            await self.session.rollback()
            raise AlreadyExistsError()

        logger.info("Registered user %s (%s)", username, user.id)
        return user

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a freshly issued token."""
        user = await self.get_user_by_email(email)
        if user is None:
            raise NotFoundError()

        matches = await asyncio.to_thread(self.hasher.verify, password, user.password_hash)
        if not matches:
            logger.warning("Failed login for %s (%s)", user.username, user.id)
            raise InvalidCredentialsError()

        logger.info("Login: %s (%s)", user.username, user.id)
        return self.tokens.issue(str(user.id))

    async def logout(self, user: User) -> None:
        # Tokens are stateless; nothing to revoke.
        logger.info("Logout: %s (%s)", user.username, user.id)

    async def get_user(self, user_id: str | uuid.UUID) -> Optional[User]:
        uid = _to_uuid(user_id)
        if uid is None:
            return None
        return await self.session.get(User, uid)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def set_password(self, user: User, password: str) -> User:
        """Re-hash and persist a changed password."""
        user.password_hash = await asyncio.to_thread(self.hasher.hash, password)
        await self.session.commit()
        logger.info("Password changed for %s (%s)", user.username, user.id)
        return user
