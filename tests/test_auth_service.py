"""Credential service tests: login modes, registration, refresh rotation, logout."""

import uuid

import pytest
from pydantic import ValidationError
from sqlalchemy import select

from cwie.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
)
from cwie.models.enums import UserRole
from cwie.models.user import User
from cwie.schemas.auth import RegisterRequest
from cwie.services.auth_service import CredentialService

from .conftest import PASSWORD


@pytest.fixture
def local_service(db, settings):
    return CredentialService(db, settings)


@pytest.fixture
def ldap_service(db, settings, identity_verifier):
    return CredentialService(db, settings.model_copy(update={"AUTH_MODE": "ldap"}), identity_verifier)


class TestLocalLogin:
    @pytest.mark.asyncio
    async def test_login_by_username_or_email(self, local_service, make_user):
        await make_user("somchai", email="somchai@example.com")

        user, tokens = await local_service.login("somchai", PASSWORD)
        assert user.username == "somchai"
        assert tokens.access_token and tokens.refresh_token

        user, _ = await local_service.login("somchai@example.com", PASSWORD)
        assert user.username == "somchai"

    @pytest.mark.asyncio
    async def test_login_stores_refresh_token_hash(self, local_service, make_user):
        await make_user("somchai")

        user, tokens = await local_service.login("somchai", PASSWORD)

        assert user.refresh_token_hash
        assert user.refresh_token_hash != tokens.refresh_token

    @pytest.mark.asyncio
    async def test_failures_share_one_message(self, local_service, make_user):
        await make_user("somchai")
        await make_user("inactive", is_active=False)

        messages = set()
        for username, password in [
            ("somchai", "wrong-password"),
            ("ghost", PASSWORD),
            ("inactive", PASSWORD),
        ]:
            with pytest.raises(UnauthenticatedError) as exc_info:
                await local_service.login(username, password)
            messages.add(exc_info.value.message)

        assert messages == {"Invalid credentials"}


class TestLdapLogin:
    @pytest.mark.asyncio
    async def test_first_login_creates_student_for_numeric_username(self, ldap_service, db):
        user, tokens = await ldap_service.login("65160001", "Secret#123")

        assert user.role == UserRole.STUDENT
        assert user.firstname == "Somchai"
        assert user.email == "65160001@go.buu.ac.th"
        assert tokens.refresh_token

        result = await db.execute(select(User).where(User.username == "65160001"))
        assert result.scalar_one().id == user.id

    @pytest.mark.asyncio
    async def test_non_numeric_username_becomes_staff(self, ldap_service):
        user, _ = await ldap_service.login("wanida.s", "Staff#456")
        assert user.role == UserRole.STAFF

    @pytest.mark.asyncio
    async def test_repeat_login_updates_existing_user(self, ldap_service, make_user):
        existing = await make_user("65160001", email="old@example.com", is_active=False)

        user, _ = await ldap_service.login("65160001", "Secret#123")

        assert user.id == existing.id
        assert user.email == "65160001@go.buu.ac.th"
        assert user.is_active is True

    @pytest.mark.asyncio
    async def test_rejected_credentials(self, ldap_service):
        with pytest.raises(UnauthenticatedError):
            await ldap_service.login("65160001", "wrong")


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_creates_user_and_tokens(self, local_service):
        user, tokens = await local_service.register(
            RegisterRequest(
                email="new@example.com",
                username="newbie",
                password="Password1!",
                firstname="New",
                lastname="User",
                role=UserRole.TEACHER,
            )
        )

        assert user.role == UserRole.TEACHER
        assert user.password_hash != "Password1!"
        assert tokens.access_token

        logged_in, _ = await local_service.login("newbie", "Password1!")
        assert logged_in.id == user.id

    @pytest.mark.asyncio
    async def test_duplicate_username_or_email_conflicts(self, local_service, make_user):
        await make_user("taken", email="taken@example.com")

        for username, email in [("taken", "other@example.com"), ("other", "taken@example.com")]:
            with pytest.raises(ConflictError):
                await local_service.register(
                    RegisterRequest(
                        email=email,
                        username=username,
                        password="Password1!",
                        firstname="A",
                        lastname="B",
                    )
                )

    @pytest.mark.asyncio
    async def test_register_disabled_with_directory_login(self, ldap_service, db):
        with pytest.raises(ForbiddenError):
            await ldap_service.register(
                RegisterRequest(
                    email="new@example.com",
                    username="newbie",
                    password="Password1!",
                    firstname="New",
                    lastname="User",
                )
            )

        result = await db.execute(select(User).where(User.username == "newbie"))
        assert result.scalar_one_or_none() is None

    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.SUPER_ADMIN, UserRole.STAFF])
    def test_privileged_roles_not_registrable(self, role):
        with pytest.raises(ValidationError):
            RegisterRequest(
                email="new@example.com",
                username="newbie",
                password="Password1!",
                firstname="New",
                lastname="User",
                role=role,
            )


class TestRefreshAndLogout:
    @pytest.mark.asyncio
    async def test_refresh_rotates_tokens(self, local_service, make_user):
        await make_user("somchai")
        user, first = await local_service.login("somchai", PASSWORD)

        second = await local_service.refresh_tokens(user.id, first.refresh_token)
        assert second.refresh_token != first.refresh_token

        # The rotated-out token is no longer accepted
        with pytest.raises(ForbiddenError):
            await local_service.refresh_tokens(user.id, first.refresh_token)

        third = await local_service.refresh_tokens(user.id, second.refresh_token)
        assert third.refresh_token

    @pytest.mark.asyncio
    async def test_second_login_invalidates_previous_session(self, local_service, make_user):
        await make_user("somchai")
        user, first = await local_service.login("somchai", PASSWORD)
        _, second = await local_service.login("somchai", PASSWORD)

        with pytest.raises(ForbiddenError):
            await local_service.refresh_tokens(user.id, first.refresh_token)

        assert await local_service.refresh_tokens(user.id, second.refresh_token)

    @pytest.mark.asyncio
    async def test_mismatch_leaves_stored_hash_untouched(self, local_service, make_user):
        await make_user("somchai")
        user, tokens = await local_service.login("somchai", PASSWORD)
        stored = user.refresh_token_hash

        with pytest.raises(ForbiddenError):
            await local_service.refresh_tokens(user.id, "some-other-token")

        assert user.refresh_token_hash == stored
        assert await local_service.refresh_tokens(user.id, tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_refresh_unknown_user(self, local_service):
        with pytest.raises(NotFoundError):
            await local_service.refresh_tokens(uuid.uuid4(), "token")

    @pytest.mark.asyncio
    async def test_logout_is_idempotent_and_blocks_refresh(self, local_service, make_user):
        await make_user("somchai")
        user, tokens = await local_service.login("somchai", PASSWORD)

        await local_service.logout(user.id)
        await local_service.logout(user.id)

        assert user.refresh_token_hash is None
        with pytest.raises(ForbiddenError):
            await local_service.refresh_tokens(user.id, tokens.refresh_token)
