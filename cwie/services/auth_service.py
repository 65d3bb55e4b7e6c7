"""
Credential service: login, registration, token refresh and logout.

Only one refresh token is valid per user at any time. Its bcrypt hash is
stored on the user row and replaced on every login or refresh.
"""

import secrets
from typing import Optional, Tuple
from uuid import UUID

import structlog
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cwie.config import Settings
from cwie.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    normalize_error,
)
from cwie.core.security import (
    TokenPair,
    create_token_pair,
    get_password_hash,
    hash_refresh_token,
    verify_password,
    verify_refresh_token,
)
from cwie.models.enums import UserRole
from cwie.models.user import User
from cwie.schemas.auth import RegisterRequest
from cwie.services.identity_service import IdentityRecord, IdentityVerifier
from cwie.utils.validators import is_numeric_username

logger = structlog.get_logger(__name__)

AUTH_MODE_LDAP = "ldap"
AUTH_MODE_LOCAL = "local"


class CredentialService:
    """Authenticates users and manages their token pairs."""

    def __init__(
        self,
        db: AsyncSession,
        settings: Settings,
        identity_verifier: Optional[IdentityVerifier] = None,
    ):
        self.db = db
        self.settings = settings
        self.identity_verifier = identity_verifier

    async def login(self, username_or_email: str, password: str) -> Tuple[User, TokenPair]:
        """Authenticate and issue a fresh token pair."""
        try:
            if self.settings.AUTH_MODE == AUTH_MODE_LOCAL:
                user = await self._authenticate_local(username_or_email, password)
            else:
                user = await self._authenticate_ldap(username_or_email, password)

            tokens = await self._issue_tokens(user)
            logger.info("user_logged_in", user_id=str(user.id), mode=self.settings.AUTH_MODE)
            return user, tokens
        except Exception as e:
            normalize_error(e, "Login failed", username=username_or_email)

    async def _authenticate_local(self, username_or_email: str, password: str) -> User:
        result = await self.db.execute(
            select(User).where(
                or_(User.username == username_or_email, User.email == username_or_email)
            )
        )
        user = result.scalar_one_or_none()

        # Same error for unknown user, inactive user and wrong password
        if not user or not user.is_active or not verify_password(password, user.password_hash):
            raise UnauthenticatedError("Invalid credentials")
        return user

    async def _authenticate_ldap(self, username: str, password: str) -> User:
        if self.identity_verifier is None:
            raise UnauthenticatedError("LDAP authentication failed")

        record = await self.identity_verifier.verify_credentials(username, password)
        return await self._upsert_directory_user(record)

    async def _upsert_directory_user(self, record: IdentityRecord) -> User:
        result = await self.db.execute(select(User).where(User.username == record.username))
        user = result.scalar_one_or_none()

        if user is None:
            user = User(
                username=record.username,
                role=UserRole.STUDENT if is_numeric_username(record.username) else UserRole.STAFF,
                # Directory users never log in with a local password
                password_hash=get_password_hash(secrets.token_urlsafe(32)),
            )
            self.db.add(user)
            logger.info("directory_user_created", username=record.username, role=user.role.value)

        if record.email:
            user.email = record.email
        if record.first_name:
            user.firstname = record.first_name
        if record.last_name:
            user.lastname = record.last_name
        user.is_active = True

        await self.db.flush()
        return user

    async def _issue_tokens(self, user: User) -> TokenPair:
        tokens = create_token_pair(str(user.id), user.username, self.settings)
        user.refresh_token_hash = hash_refresh_token(tokens.refresh_token)
        await self.db.commit()
        return tokens

    async def register(self, data: RegisterRequest) -> Tuple[User, TokenPair]:
        """Create a local account and log it in. Only available with local credentials."""
        try:
            if self.settings.AUTH_MODE != AUTH_MODE_LOCAL:
                raise ForbiddenError("Registration is disabled")

            result = await self.db.execute(
                select(User).where(
                    or_(User.username == data.username, User.email == data.email)
                )
            )
            if result.scalars().first() is not None:
                raise ConflictError("User with this username or email already exists")

            user = User(
                username=data.username,
                email=data.email,
                firstname=data.firstname,
                lastname=data.lastname,
                role=data.role,
                password_hash=get_password_hash(data.password),
            )
            self.db.add(user)
            await self.db.flush()

            tokens = await self._issue_tokens(user)
            logger.info("user_registered", user_id=str(user.id), role=user.role.value)
            return user, tokens
        except Exception as e:
            normalize_error(e, "Registration failed", username=data.username)

    async def refresh_tokens(self, user_id: UUID, refresh_token: str) -> TokenPair:
        """Rotate the token pair. A mismatching token leaves the stored hash untouched."""
        try:
            user = await self.db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")

            if not user.refresh_token_hash:
                raise ForbiddenError("Access denied")

            if not verify_refresh_token(refresh_token, user.refresh_token_hash):
                logger.warning("refresh_token_mismatch", user_id=str(user_id))
                raise ForbiddenError("Access denied")

            return await self._issue_tokens(user)
        except Exception as e:
            normalize_error(e, "Token refresh failed", user_id=user_id)

    async def logout(self, user_id: UUID) -> None:
        """Forget the stored refresh token. Safe to call repeatedly."""
        try:
            user = await self.db.get(User, user_id)
            if user is not None:
                user.refresh_token_hash = None
                await self.db.commit()
            logger.info("user_logged_out", user_id=str(user_id))
        except Exception as e:
            normalize_error(e, "Logout failed", user_id=user_id)
