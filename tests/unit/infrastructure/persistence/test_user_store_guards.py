"""
Unit tests for the store's entry checks.

The session is an AsyncMock so we can assert that rejected calls never touch
storage.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from custom_identity import (
    CancellationToken,
    Claim,
    IdentityError,
    IdentityErrorCode,
    IdentityErrorDescriber,
    OperationCancelledError,
    StoreDisposedError,
    User,
    UserClaimAssociativesUpdate,
    UserLoginInfo,
)
from custom_identity.infrastructure.persistence.sqlalchemy import (
    UserModel,
    UserStoreSQLAlchemy,
)
from custom_identity_config import clear_settings_cache

CLAIM = Claim("permission", "read")

# Each entry forwards keyword arguments so a cancellation token can be passed.
OPERATIONS = [
    ("create", lambda s, u, **kw: s.create(u, **kw)),
    ("update", lambda s, u, **kw: s.update(u, **kw)),
    ("delete", lambda s, u, **kw: s.delete(u, **kw)),
    ("find_by_id", lambda s, u, **kw: s.find_by_id(u.id, **kw)),
    ("find_by_name", lambda s, u, **kw: s.find_by_name("ALICE", **kw)),
    ("find_by_email", lambda s, u, **kw: s.find_by_email("ALICE@EXAMPLE.COM", **kw)),
    ("get_user_id", lambda s, u, **kw: s.get_user_id(u, **kw)),
    ("set_user_name", lambda s, u, **kw: s.set_user_name(u, "x", **kw)),
    ("get_email", lambda s, u, **kw: s.get_email(u, **kw)),
    ("set_security_stamp", lambda s, u, **kw: s.set_security_stamp(u, "stamp", **kw)),
    ("has_password", lambda s, u, **kw: s.has_password(u, **kw)),
    (
        "add_login",
        lambda s, u, **kw: s.add_login(u, UserLoginInfo("github", "42"), **kw),
    ),
    ("remove_login", lambda s, u, **kw: s.remove_login(u, "github", "42", **kw)),
    ("get_logins", lambda s, u, **kw: s.get_logins(u, **kw)),
    ("find_by_login", lambda s, u, **kw: s.find_by_login("github", "42", **kw)),
    ("get_claims", lambda s, u, **kw: s.get_claims(u, **kw)),
    ("add_claims", lambda s, u, **kw: s.add_claims(u, [CLAIM], **kw)),
    (
        "replace_claim",
        lambda s, u, **kw: s.replace_claim(u, CLAIM, Claim("a", "b"), **kw),
    ),
    ("remove_claims", lambda s, u, **kw: s.remove_claims(u, [CLAIM], **kw)),
    ("get_users_for_claim", lambda s, u, **kw: s.get_users_for_claim(CLAIM, **kw)),
    (
        "update_claim_associatives",
        lambda s, u, **kw: s.update_claim_associatives(
            UserClaimAssociativesUpdate.of(u.id, [1]), **kw
        ),
    ),
    ("add_to_role", lambda s, u, **kw: s.add_to_role(u, "ADMIN", **kw)),
    ("get_roles", lambda s, u, **kw: s.get_roles(u, **kw)),
    ("get_users_in_role", lambda s, u, **kw: s.get_users_in_role("ADMIN", **kw)),
    ("save_changes", lambda s, u, **kw: s.save_changes(**kw)),
]


def _make_store(**kwargs) -> tuple[UserStoreSQLAlchemy, AsyncMock]:
    session = AsyncMock(spec=AsyncSession)
    kwargs.setdefault("auto_save_changes", True)
    return UserStoreSQLAlchemy(session, **kwargs), session


class TestDisposal:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation", [op for _, op in OPERATIONS], ids=[n for n, _ in OPERATIONS]
    )
    async def test_disposed_store_fails_without_io(self, operation):
        store, session = _make_store()
        store.dispose()

        with pytest.raises(StoreDisposedError):
            await operation(store, User.create("alice", "alice@example.com"))

        assert session.mock_calls == []

    @pytest.mark.asyncio
    async def test_async_with_disposes_on_exit(self):
        store, _ = _make_store()

        async with store:
            await store.get_user_name(User.create("alice"))

        with pytest.raises(StoreDisposedError):
            await store.get_user_name(User.create("alice"))

    @pytest.mark.asyncio
    async def test_cannot_enter_disposed_store(self):
        store, _ = _make_store()
        store.dispose()

        with pytest.raises(StoreDisposedError):
            async with store:
                pass


class TestCancellation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation", [op for _, op in OPERATIONS], ids=[n for n, _ in OPERATIONS]
    )
    async def test_cancelled_token_stops_before_io(self, operation):
        store, session = _make_store()
        token = CancellationToken()
        token.cancel()
        user = User.create("alice")

        with pytest.raises(OperationCancelledError):
            await operation(store, user, cancellation=token)

        assert session.mock_calls == []

    @pytest.mark.asyncio
    async def test_cancellation_is_reported_before_disposal(self):
        store, _ = _make_store()
        store.dispose()
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            await store.create(User.create("alice"), cancellation=token)

    @pytest.mark.asyncio
    async def test_expired_deadline_counts_as_cancelled(self):
        store, session = _make_store()

        with pytest.raises(OperationCancelledError):
            await store.create(
                User.create("alice"),
                cancellation=CancellationToken.with_timeout(0),
            )

        assert session.mock_calls == []

    @pytest.mark.asyncio
    async def test_live_token_lets_call_through(self):
        store, session = _make_store()

        result = await store.create(
            User.create("alice"),
            cancellation=CancellationToken.with_timeout(60),
        )

        assert result.succeeded
        session.commit.assert_awaited_once()


class TestArgumentValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.create(None),
            lambda s: s.update(None),
            lambda s: s.delete(None),
            lambda s: s.get_user_name(None),
            lambda s: s.set_email(None, "a@example.com"),
            lambda s: s.add_login(User.create("a"), None),
            lambda s: s.add_claims(User.create("a"), None),
            lambda s: s.replace_claim(User.create("a"), None, CLAIM),
            lambda s: s.replace_claim(User.create("a"), CLAIM, None),
            lambda s: s.remove_claims(User.create("a"), None),
            lambda s: s.get_users_for_claim(None),
        ],
    )
    async def test_none_arguments_raise_value_error(self, call):
        store, session = _make_store()

        with pytest.raises(ValueError):
            await call(store)

        assert session.mock_calls == []

    @pytest.mark.asyncio
    async def test_find_by_name_none_returns_none_without_io(self):
        store, session = _make_store()

        assert await store.find_by_name(None) is None
        assert session.mock_calls == []

    @pytest.mark.asyncio
    async def test_empty_security_stamp_is_rejected(self):
        store, _ = _make_store()
        user = User.create("alice")

        with pytest.raises(ValueError):
            await store.set_security_stamp(user, "")


class TestFieldAccessors:
    @pytest.mark.asyncio
    async def test_setters_change_only_the_instance(self):
        store, session = _make_store()
        user = User.create("alice", "alice@example.com")

        await store.set_user_name(user, "alicia")
        await store.set_normalized_user_name(user, "ALICIA")
        await store.set_email_confirmed(user, True)
        await store.set_password_hash(user, "hash")
        await store.set_security_stamp(user, "STAMP")
        await store.set_two_factor_enabled(user, True)

        assert await store.get_user_name(user) == "alicia"
        assert await store.get_normalized_user_name(user) == "ALICIA"
        assert await store.get_email_confirmed(user) is True
        assert await store.get_password_hash(user) == "hash"
        assert await store.has_password(user) is True
        assert await store.get_security_stamp(user) == "STAMP"
        assert await store.get_two_factor_enabled(user) is True
        assert await store.get_user_id(user) == str(user.id)
        assert session.mock_calls == []

    @pytest.mark.asyncio
    async def test_access_failed_count(self):
        store, _ = _make_store()
        user = User.create("alice")

        assert await store.increment_access_failed_count(user) == 1
        assert await store.increment_access_failed_count(user) == 2
        await store.reset_access_failed_count(user)

        assert await store.get_access_failed_count(user) == 0

    @pytest.mark.asyncio
    async def test_has_password_false_without_hash(self):
        store, _ = _make_store()

        assert await store.has_password(User.create("alice")) is False


class TestSaving:
    @pytest.mark.asyncio
    async def test_create_commits_when_auto_saving(self):
        store, session = _make_store()
        user = User.create("alice")

        await store.create(user)

        (model,) = session.add.call_args.args
        assert isinstance(model, UserModel)
        assert model.concurrency_stamp == user.concurrency_stamp
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_defers_commit_when_batching(self):
        store, session = _make_store(auto_save_changes=False)

        await store.create(User.create("alice"))

        session.add.assert_called_once()
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_commit_rolls_back_and_propagates(self):
        store, session = _make_store()
        session.commit.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            await store.create(User.create("alice"))

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_of_missing_row_reports_concurrency_failure(self):
        store, session = _make_store()
        session.get.return_value = None

        result = await store.update(User.create("alice"))

        assert result.error_codes == [IdentityErrorCode.CONCURRENCY_FAILURE]
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_error_describer(self):
        class LocalizedDescriber(IdentityErrorDescriber):
            def concurrency_failure(self) -> IdentityError:
                return IdentityError(
                    IdentityErrorCode.CONCURRENCY_FAILURE, "Bitte neu laden."
                )

        store, session = _make_store(error_describer=LocalizedDescriber())
        session.get.return_value = None

        result = await store.delete(User.create("alice"))

        assert result.errors[0].description == "Bitte neu laden."

    def test_auto_save_defaults_to_settings(self, monkeypatch):
        monkeypatch.setenv("IDENTITY_AUTO_SAVE_CHANGES", "false")
        clear_settings_cache()

        store = UserStoreSQLAlchemy(AsyncMock(spec=AsyncSession))

        assert store.auto_save_changes is False
