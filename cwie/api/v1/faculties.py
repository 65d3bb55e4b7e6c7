"""Faculty endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from cwie.api.deps import get_faculty_service, require_admin
from cwie.models.user import User
from cwie.schemas.common import DeleteResponse
from cwie.schemas.faculty import FacultyCreate, FacultyResponse, FacultyUpdate
from cwie.services.faculty_service import FacultyService

router = APIRouter()


@router.post("/", response_model=FacultyResponse, status_code=status.HTTP_201_CREATED)
async def create_faculty(
    faculty_in: FacultyCreate,
    current_user: User = Depends(require_admin),
    service: FacultyService = Depends(get_faculty_service),
):
    """
    Create a faculty

    **RBAC**: SuperAdmin, Admin
    """
    return await service.create(faculty_in)


@router.get("/", response_model=List[FacultyResponse])
async def list_faculties(service: FacultyService = Depends(get_faculty_service)):
    """List faculties with their departments."""
    return await service.list()


@router.get("/{faculty_id}", response_model=FacultyResponse)
async def get_faculty(faculty_id: UUID, service: FacultyService = Depends(get_faculty_service)):
    return await service.get(faculty_id)


@router.patch("/{faculty_id}", response_model=FacultyResponse)
async def update_faculty(
    faculty_id: UUID,
    faculty_in: FacultyUpdate,
    current_user: User = Depends(require_admin),
    service: FacultyService = Depends(get_faculty_service),
):
    return await service.update(faculty_id, faculty_in)


@router.delete("/{faculty_id}", response_model=DeleteResponse)
async def delete_faculty(
    faculty_id: UUID,
    current_user: User = Depends(require_admin),
    service: FacultyService = Depends(get_faculty_service),
):
    """
    Delete a faculty. Fails with 409 while it still has departments.

    **RBAC**: SuperAdmin, Admin
    """
    await service.remove(faculty_id)
    return DeleteResponse(id=faculty_id)
