"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status

from cwie.api.deps import (
    RefreshCredentials,
    get_credential_service,
    get_current_user,
    get_refresh_credentials,
    get_user_service,
)
from cwie.models.user import User
from cwie.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenResponse,
    UpdateUserRequest,
    UserResponse,
    UserWithDepartmentsResponse,
)
from cwie.schemas.common import MessageResponse
from cwie.services.auth_service import CredentialService
from cwie.services.user_service import UserService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    service: CredentialService = Depends(get_credential_service),
):
    """Login with username (or email in local mode) and password."""
    user, tokens = await service.login(request.username_or_email, request.password)
    return LoginResponse(**tokens.model_dump(), user=UserResponse.model_validate(user))


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    service: CredentialService = Depends(get_credential_service),
):
    """Register a new local user and log it in."""
    user, tokens = await service.register(request)
    return LoginResponse(**tokens.model_dump(), user=UserResponse.model_validate(user))


@router.get("/profile", response_model=UserWithDepartmentsResponse)
async def profile(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Get the current user's profile."""
    return await service.get_profile(current_user.id)


@router.patch("/update", response_model=UserWithDepartmentsResponse)
async def update_profile(
    request: UpdateUserRequest,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update the current user's profile."""
    return await service.update_user(current_user.id, request)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    credentials: RefreshCredentials = Depends(get_refresh_credentials),
    service: CredentialService = Depends(get_credential_service),
):
    """
    Rotate the token pair.

    Send the refresh token as the bearer token. The previous refresh token
    stops working once this succeeds.
    """
    tokens = await service.refresh_tokens(credentials.user_id, credentials.token)
    return TokenResponse(**tokens.model_dump())


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    service: CredentialService = Depends(get_credential_service),
):
    await service.logout(current_user.id)
    return MessageResponse(message="Logged out successfully")


@router.delete("/delete", response_model=MessageResponse)
async def delete_account(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Delete the current user's account."""
    await service.delete_user(current_user.id)
    return MessageResponse(message="User deleted successfully")
