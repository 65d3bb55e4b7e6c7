"""
API Dependencies
Common dependencies for API endpoints (authentication, authorization, services)
"""

from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cwie.config import Settings
from cwie.core.context import AppContext
from cwie.core.exceptions import ForbiddenError, UnauthenticatedError
from cwie.core.security import TokenType, decode_token, is_authorized
from cwie.db.session import get_db
from cwie.models.enums import UserRole
from cwie.models.user import User
from cwie.services.auth_service import CredentialService
from cwie.services.company_service import CompanyService
from cwie.services.department_service import DepartmentService
from cwie.services.faculty_service import FacultyService
from cwie.services.industry_service import IndustryService
from cwie.services.internship_type_service import InternshipTypeService
from cwie.services.job_service import JobService
from cwie.services.user_service import UserService

# Bearer scheme for JWT tokens; missing headers are reported as 401 by us
bearer_scheme = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Not authenticated")
    return credentials.credentials


def _subject(payload: dict) -> UUID:
    try:
        return UUID(payload["sub"])
    except (KeyError, ValueError):
        raise UnauthenticatedError("Could not validate credentials")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get current authenticated user from the access token
    """
    payload = decode_token(_bearer_token(credentials), TokenType.ACCESS, settings)

    user = await db.get(User, _subject(payload))
    if user is None:
        raise UnauthenticatedError("Could not validate credentials")

    if not user.is_active:
        raise ForbiddenError("Inactive user")

    return user


class RefreshCredentials:
    """Subject and raw value of a verified refresh token."""

    def __init__(self, user_id: UUID, token: str):
        self.user_id = user_id
        self.token = token


async def get_refresh_credentials(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> RefreshCredentials:
    """
    Verify the bearer refresh token (signed with the refresh secret)
    """
    token = _bearer_token(credentials)
    payload = decode_token(token, TokenType.REFRESH, settings)
    return RefreshCredentials(_subject(payload), token)


def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory allowing only the given roles."""

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if not is_authorized(current_user.role, roles):
            raise ForbiddenError(
                f"Access denied. Requires one of: {', '.join(r.value for r in roles)}"
            )
        return current_user

    return checker


# Role-based access control shortcuts
require_admin = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN)
require_staff_or_admin = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN, UserRole.STAFF)
require_job_editor = require_roles(UserRole.ADMIN, UserRole.COMPANY, UserRole.SUPER_ADMIN)


# ==================== Services ====================

def get_credential_service(
    db: AsyncSession = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> CredentialService:
    return CredentialService(db, context.settings, context.identity_verifier)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_faculty_service(db: AsyncSession = Depends(get_db)) -> FacultyService:
    return FacultyService(db)


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    return DepartmentService(db)


def get_industry_service(db: AsyncSession = Depends(get_db)) -> IndustryService:
    return IndustryService(db)


def get_internship_type_service(db: AsyncSession = Depends(get_db)) -> InternshipTypeService:
    return InternshipTypeService(db)


def get_company_service(db: AsyncSession = Depends(get_db)) -> CompanyService:
    return CompanyService(db)


def get_job_service(db: AsyncSession = Depends(get_db)) -> JobService:
    return JobService(db)
