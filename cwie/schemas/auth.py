"""Authentication and user schemas."""

from __future__ import annotations  # Enable forward references

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from cwie.models.enums import UserRole
from cwie.schemas.faculty import DepartmentBrief
from cwie.utils.validators import validate_password_strength

# Roles a user may pick when self-registering
REGISTRABLE_ROLES = (UserRole.STUDENT, UserRole.TEACHER, UserRole.COMPANY)


def _check_password(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    ok, errors = validate_password_strength(value)
    if not ok:
        raise ValueError(f"Password is too weak: {'; '.join(errors)}")
    return value


class LoginRequest(BaseModel):
    """Login request schema."""

    username_or_email: str = Field(..., min_length=1, examples=["56050419"])
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Register request schema (local credentials)."""

    email: EmailStr
    username: str = Field(..., min_length=4)
    password: str = Field(..., min_length=8, description="Upper and lower case letters plus a digit or symbol")
    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    role: UserRole = UserRole.STUDENT

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: Optional[str]) -> Optional[str]:
        return _check_password(v)

    @field_validator("role")
    @classmethod
    def role_is_registrable(cls, v: UserRole) -> UserRole:
        if v not in REGISTRABLE_ROLES:
            raise ValueError(f"Role must be one of {[r.value for r in REGISTRABLE_ROLES]}")
        return v


class UpdateUserRequest(BaseModel):
    """Profile update schema, every field optional."""

    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=4)
    password: Optional[str] = Field(None, min_length=8)
    firstname: Optional[str] = None
    lastname: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: Optional[str]) -> Optional[str]:
        return _check_password(v)


class UserResponse(BaseModel):
    """User response schema (never carries password or token hashes)."""

    id: UUID
    username: str
    email: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserWithDepartmentsResponse(UserResponse):
    departments: List[DepartmentBrief] = Field(default_factory=list)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginResponse(TokenResponse):
    """Login response schema."""

    user: UserResponse
