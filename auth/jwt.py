"""
JWT creation and verification.

Tokens are HS256 JWTs (``python-jose``) carrying ``userId``, ``iat`` and
``exp``. The secret comes from ``Settings.secret_key`` (env var: ``SECRET_KEY``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from exceptions import TokenExpiredError, TokenInvalidError


class TokenService:
    """Issues and verifies signed, time-bound bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry_seconds: Optional[int] = 86400,
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    def issue(self, user_id: str, issued_at: Optional[datetime] = None) -> str:
        """Create a signed token for ``user_id``."""
        now = issued_at or datetime.now(timezone.utc)
        payload = {"userId": str(user_id), "iat": now}
        if self.expiry_seconds:
            payload["exp"] = now + timedelta(seconds=self.expiry_seconds)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Verify token and return ``userId``.

        Raises ``TokenExpiredError`` once ``exp`` has passed and
        ``TokenInvalidError`` for any other failure.
        """
        if not token:
            raise TokenInvalidError(reason="empty token")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as exc:
            raise TokenInvalidError(reason=str(exc))

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise TokenInvalidError(reason="missing userId claim")
        return user_id
