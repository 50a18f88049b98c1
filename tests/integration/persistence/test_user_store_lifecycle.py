"""Integration tests for user create/update/delete/find."""

from uuid import uuid4

import pytest

from custom_identity import Claim, IdentityErrorCode, User, UserLoginInfo
from custom_identity.infrastructure.persistence.sqlalchemy import open_user_store
from tests.shared.fixtures.database import TEST_USER_ID


def _make_user(name: str = "alice") -> User:
    user = User.create(name, f"{name}@example.com")
    user.password_hash = "hashed-secret"
    user.email_confirmed = True
    return user


def _assert_same_fields(found: User, expected: User) -> None:
    assert found.id == expected.id
    assert found.user_name == expected.user_name
    assert found.normalized_user_name == expected.normalized_user_name
    assert found.email == expected.email
    assert found.normalized_email == expected.normalized_email
    assert found.email_confirmed == expected.email_confirmed
    assert found.password_hash == expected.password_hash
    assert found.security_stamp == expected.security_stamp
    assert found.two_factor_enabled == expected.two_factor_enabled
    assert found.access_failed_count == expected.access_failed_count


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_then_find_by_id_returns_same_fields(
        self, user_store, session_maker
    ):
        """A created user reads back identically, with a new concurrency stamp."""
        user = _make_user()
        stamp_before = user.concurrency_stamp

        result = await user_store.create(user)

        assert result.succeeded
        assert user.concurrency_stamp is not None
        assert user.concurrency_stamp != stamp_before

        async with open_user_store(session_maker) as other:
            found = await other.find_by_id(user.id)

        assert found is not None
        _assert_same_fields(found, user)
        assert found.concurrency_stamp == user.concurrency_stamp

    @pytest.mark.asyncio
    async def test_create_keeps_given_id(self, user_store):
        user = User(user_name="fixed", id=TEST_USER_ID)

        await user_store.create(user)

        found = await user_store.find_by_id(TEST_USER_ID)
        assert found is not None
        assert found.id == TEST_USER_ID


class TestFind:
    @pytest.mark.asyncio
    async def test_find_by_id_accepts_string(self, user_store):
        user = _make_user()
        await user_store.create(user)

        found = await user_store.find_by_id(str(user.id))

        assert found == user

    @pytest.mark.asyncio
    async def test_find_by_id_unknown_returns_none(self, user_store):
        assert await user_store.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_id_unparsable_returns_none(self, user_store):
        assert await user_store.find_by_id("not-a-uuid") is None

    @pytest.mark.asyncio
    async def test_find_by_name_matches_normalized_name(self, user_store):
        user = _make_user("bob")
        await user_store.create(user)

        assert await user_store.find_by_name("BOB") == user
        assert await user_store.find_by_name("bob") is None

    @pytest.mark.asyncio
    async def test_find_by_email_matches_normalized_email(self, user_store):
        user = _make_user("carol")
        await user_store.create(user)

        assert await user_store.find_by_email("CAROL@EXAMPLE.COM") == user
        assert await user_store.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_find_by_email_rejects_none(self, user_store):
        with pytest.raises(ValueError):
            await user_store.find_by_email(None)

    @pytest.mark.asyncio
    async def test_find_by_name_none_finds_nobody(self, user_store):
        await user_store.create(User.create("frank"))

        assert await user_store.find_by_name(None) is None


class TestUpdate:
    @pytest.mark.asyncio
    async def test_setters_do_not_persist_until_update(self, user_store, session_maker):
        """Setters only touch the in-memory user."""
        user = _make_user()
        await user_store.create(user)

        await user_store.set_email(user, "renamed@example.com")
        await user_store.set_normalized_email(user, "RENAMED@EXAMPLE.COM")

        async with open_user_store(session_maker) as other:
            before = await other.find_by_id(user.id)
        assert before.email == "alice@example.com"

        stamp_before = user.concurrency_stamp
        result = await user_store.update(user)

        assert result.succeeded
        assert user.concurrency_stamp != stamp_before
        async with open_user_store(session_maker) as other:
            after = await other.find_by_id(user.id)
        assert after.email == "renamed@example.com"
        assert after.concurrency_stamp == user.concurrency_stamp

    @pytest.mark.asyncio
    async def test_update_never_created_user_is_concurrency_failure(self, user_store):
        result = await user_store.update(_make_user())

        assert not result.succeeded
        assert result.error_codes == [IdentityErrorCode.CONCURRENCY_FAILURE]

    @pytest.mark.asyncio
    async def test_update_with_stale_stamp_is_concurrency_failure(self, user_store):
        user = _make_user()
        await user_store.create(user)
        copy = await user_store.find_by_id(user.id)
        copy.concurrency_stamp = "outdated"
        copy.email = "other@example.com"

        result = await user_store.update(copy)

        assert not result.succeeded
        assert result.error_codes == [IdentityErrorCode.CONCURRENCY_FAILURE]
        found = await user_store.find_by_id(user.id)
        assert found.email == "alice@example.com"


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_user_and_associations(self, user_store, roles):
        user = _make_user()
        await user_store.create(user)
        await user_store.add_login(user, UserLoginInfo("github", "42", "GitHub"))
        await user_store.add_claims(user, [Claim("permission", "read")])
        await user_store.add_to_role(user, "ADMIN")

        result = await user_store.delete(user)

        assert result.succeeded
        assert await user_store.find_by_id(user.id) is None
        assert await user_store.find_by_login("github", "42") is None
        assert await user_store.get_users_for_claim(Claim("permission", "read")) == []
        assert await user_store.get_users_in_role("ADMIN") == []

    @pytest.mark.asyncio
    async def test_delete_with_stale_stamp_is_concurrency_failure(self, user_store):
        user = _make_user()
        await user_store.create(user)
        copy = await user_store.find_by_id(user.id)
        copy.concurrency_stamp = "outdated"

        result = await user_store.delete(copy)

        assert result.error_codes == [IdentityErrorCode.CONCURRENCY_FAILURE]
        assert await user_store.find_by_id(user.id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_user_is_concurrency_failure(self, user_store):
        result = await user_store.delete(_make_user())

        assert result.error_codes == [IdentityErrorCode.CONCURRENCY_FAILURE]
