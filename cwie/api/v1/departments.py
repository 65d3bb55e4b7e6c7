"""
Department endpoints
- SuperAdmin/Admin/Staff: manage any department
- Teacher: manage departments of a faculty they are affiliated with
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from cwie.api.deps import get_department_service, require_roles
from cwie.models.enums import UserRole
from cwie.models.user import User
from cwie.schemas.common import DeleteResponse
from cwie.schemas.faculty import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from cwie.services.department_service import DepartmentService

router = APIRouter()

require_department_editor = require_roles(
    UserRole.ADMIN, UserRole.SUPER_ADMIN, UserRole.TEACHER, UserRole.STAFF
)


@router.post("/", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(
    department_in: DepartmentCreate,
    current_user: User = Depends(require_department_editor),
    service: DepartmentService = Depends(get_department_service),
):
    return await service.create(department_in, current_user)


@router.get("/", response_model=List[DepartmentResponse])
async def list_departments(service: DepartmentService = Depends(get_department_service)):
    return await service.list()


@router.get("/faculty/{faculty_id}", response_model=List[DepartmentResponse])
async def list_departments_by_faculty(
    faculty_id: UUID,
    service: DepartmentService = Depends(get_department_service),
):
    return await service.list_by_faculty(faculty_id)


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: UUID,
    service: DepartmentService = Depends(get_department_service),
):
    return await service.get(department_id)


@router.patch("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: UUID,
    department_in: DepartmentUpdate,
    current_user: User = Depends(require_department_editor),
    service: DepartmentService = Depends(get_department_service),
):
    return await service.update(department_id, department_in, current_user)


@router.delete("/{department_id}", response_model=DeleteResponse)
async def delete_department(
    department_id: UUID,
    current_user: User = Depends(require_department_editor),
    service: DepartmentService = Depends(get_department_service),
):
    """Delete a department. Fails with 409 while users are associated with it."""
    await service.remove(department_id, current_user)
    return DeleteResponse(id=department_id)
