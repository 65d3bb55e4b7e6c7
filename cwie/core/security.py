"""Security utilities: JWT, password and refresh-token hashing, RBAC."""

import hashlib
import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from cwie.config import Settings
from cwie.core.exceptions import InternalError, UnauthenticatedError
from cwie.models.enums import UserRole

logger = structlog.get_logger(__name__)

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenPair(BaseModel):
    """Access/refresh pair handed back on login and refresh."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


# Roles that may manage directory data without further affiliation checks
PRIVILEGED_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN, UserRole.STAFF})


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt."""
    try:
        return pwd_context.hash(password)
    except Exception as e:
        logger.error("password_hashing_failed", error=str(e))
        raise InternalError("Password hashing failed") from e


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash. Malformed hashes never match."""
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        return False


def _digest(token: str) -> str:
    # bcrypt only reads the first 72 bytes; JWTs share a long common prefix
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def hash_refresh_token(refresh_token: str) -> str:
    """One-way hash of a refresh token for server-side storage."""
    return get_password_hash(_digest(refresh_token))


def verify_refresh_token(refresh_token: str, refresh_token_hash: str) -> bool:
    return verify_password(_digest(refresh_token), refresh_token_hash)


def _create_token(
    user_id: str,
    username: str,
    token_type: TokenType,
    secret: str,
    expires_delta: timedelta,
    algorithm: str,
) -> str:
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "type": token_type.value,
        "jti": uuid.uuid4().hex,
        "exp": datetime.utcnow() + expires_delta,
    }
    try:
        return jwt.encode(to_encode, secret, algorithm=algorithm)
    except (JWTError, TypeError, ValueError) as e:
        logger.error("token_generation_failed", user_id=str(user_id), error=str(e))
        raise InternalError("Token generation failed") from e


def create_access_token(user_id: str, username: str, settings: Settings) -> str:
    """Create JWT access token."""
    return _create_token(
        user_id,
        username,
        TokenType.ACCESS,
        settings.JWT_ACCESS_SECRET,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        settings.ALGORITHM,
    )


def create_refresh_token(user_id: str, username: str, settings: Settings) -> str:
    """Create JWT refresh token."""
    return _create_token(
        user_id,
        username,
        TokenType.REFRESH,
        settings.JWT_REFRESH_SECRET,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        settings.ALGORITHM,
    )


def create_token_pair(user_id: str, username: str, settings: Settings) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user_id, username, settings),
        refresh_token=create_refresh_token(user_id, username, settings),
    )


def decode_token(token: str, token_type: TokenType, settings: Settings) -> dict:
    """Decode and verify a JWT of the expected type."""
    secret = (
        settings.JWT_ACCESS_SECRET
        if token_type == TokenType.ACCESS
        else settings.JWT_REFRESH_SECRET
    )
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise UnauthenticatedError("Could not validate credentials")

    if payload.get("type") != token_type.value or not payload.get("sub"):
        raise UnauthenticatedError("Could not validate credentials")

    return payload


def is_authorized(role: UserRole | str, allowed_roles: Iterable[UserRole]) -> bool:
    """Check whether a role is one of the allowed roles."""
    try:
        user_role = UserRole(role)
    except ValueError:
        return False
    return user_role in set(allowed_roles)
