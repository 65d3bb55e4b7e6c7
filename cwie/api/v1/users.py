"""User endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from cwie.api.deps import get_current_user, get_user_service, require_staff_or_admin
from cwie.models.user import User
from cwie.schemas.auth import UpdateUserRequest, UserWithDepartmentsResponse
from cwie.schemas.common import MessageResponse
from cwie.services.user_service import UserService

router = APIRouter()


@router.get("/", response_model=List[UserWithDepartmentsResponse])
async def list_users(
    current_user: User = Depends(require_staff_or_admin),
    service: UserService = Depends(get_user_service),
):
    """
    List users with their department affiliations

    **RBAC**: SuperAdmin, Admin, Staff
    """
    return await service.list_users()


@router.get("/profile", response_model=UserWithDepartmentsResponse)
async def profile(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_profile(current_user.id)


@router.patch("/", response_model=UserWithDepartmentsResponse)
async def update_user(
    request: UpdateUserRequest,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.update_user(current_user.id, request)


@router.delete("/", response_model=MessageResponse)
async def delete_user(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(current_user.id)
    return MessageResponse(message="User deleted successfully")
