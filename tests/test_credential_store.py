"""
Tests for CredentialStore against an in-memory database.
"""

import uuid

import pytest

from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.service import CredentialStore
from exceptions import AlreadyExistsError, InvalidCredentialsError, NotFoundError


@pytest.fixture
def store(session) -> CredentialStore:
    return CredentialStore(session, PasswordHasher(rounds=10), TokenService("test-secret"))


class TestRegister:
    async def test_password_is_stored_hashed(self, store):
        user = await store.register("al", "a@x.com", "secret1")
        assert user.id is not None
        assert user.password_hash != "secret1"
        assert store.hasher.verify("secret1", user.password_hash)

    async def test_duplicate_email_rejected(self, store):
        await store.register("al", "a@x.com", "secret1")
        with pytest.raises(AlreadyExistsError):
            await store.register("bo", "a@x.com", "secret1")

    async def test_duplicate_username_rejected(self, store):
        await store.register("al", "a@x.com", "secret1")
        with pytest.raises(AlreadyExistsError):
            await store.register("al", "b@x.com", "secret1")


class TestLogin:
    async def test_token_resolves_to_registered_user(self, store):
        user = await store.register("al", "a@x.com", "secret1")
        token = await store.login("a@x.com", "secret1")
        assert store.tokens.verify(token) == str(user.id)

    async def test_unknown_email(self, store):
        with pytest.raises(NotFoundError):
            await store.login("nobody@x.com", "secret1")

    async def test_wrong_password(self, store):
        await store.register("al", "a@x.com", "secret1")
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await store.login("a@x.com", "wrong-password")
        assert exc_info.value.message == "Invalid password"


class TestUserLookup:
    async def test_get_user_by_id(self, store):
        user = await store.register("al", "a@x.com", "secret1")
        found = await store.get_user(str(user.id))
        assert found is not None
        assert found.email == "a@x.com"

    async def test_unknown_and_malformed_ids(self, store):
        assert await store.get_user(str(uuid.uuid4())) is None
        assert await store.get_user("not-a-uuid") is None

    async def test_set_password_rehashes(self, store):
        user = await store.register("al", "a@x.com", "secret1")
        old_hash = user.password_hash
        await store.set_password(user, "secret2")
        assert user.password_hash != old_hash
        assert await store.login("a@x.com", "secret2")
        with pytest.raises(InvalidCredentialsError):
            await store.login("a@x.com", "secret1")
