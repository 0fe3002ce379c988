"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import bcrypt

from exceptions import InvalidInputError

MIN_ROUNDS = 10
_BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """bcrypt hasher bound to one work factor."""

    def __init__(self, rounds: int = 12) -> None:
        if rounds < MIN_ROUNDS:
            raise ValueError(f"bcrypt rounds must be >= {MIN_ROUNDS}, got {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted)."""
        if not isinstance(password, str) or not password.strip():
            raise InvalidInputError("Password must be a non-empty string")
        raw = password.encode()
        if len(raw) > _BCRYPT_MAX_BYTES:
            raise InvalidInputError(
                f"Password must be at most {_BCRYPT_MAX_BYTES} bytes"
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError, AttributeError):
            return False
