"""Internship type endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from cwie.api.deps import get_internship_type_service, require_admin
from cwie.models.user import User
from cwie.schemas.common import MessageResponse
from cwie.schemas.reference import (
    InternshipTypeCreate,
    InternshipTypeResponse,
    InternshipTypeUpdate,
)
from cwie.services.internship_type_service import InternshipTypeService

router = APIRouter()


@router.post("/", response_model=InternshipTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_internship_type(
    internship_type_in: InternshipTypeCreate,
    current_user: User = Depends(require_admin),
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    return await service.create(internship_type_in)


@router.get("/", response_model=List[InternshipTypeResponse])
async def list_internship_types(
    is_active: Optional[bool] = Query(None, description="Filter by active status"),
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    return await service.list(is_active)


@router.get("/{internship_type_id}", response_model=InternshipTypeResponse)
async def get_internship_type(
    internship_type_id: UUID,
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    return await service.get(internship_type_id)


@router.put("/{internship_type_id}", response_model=InternshipTypeResponse)
async def update_internship_type(
    internship_type_id: UUID,
    internship_type_in: InternshipTypeUpdate,
    current_user: User = Depends(require_admin),
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    return await service.update(internship_type_id, internship_type_in)


@router.delete("/{internship_type_id}", response_model=MessageResponse)
async def delete_internship_type(
    internship_type_id: UUID,
    current_user: User = Depends(require_admin),
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    """
    Delete an internship type

    Types still used by jobs are deactivated instead of deleted.
    """
    if await service.remove(internship_type_id):
        return MessageResponse(message="Internship type deleted")
    return MessageResponse(message="Internship type is used by jobs and was deactivated")


@router.patch("/{internship_type_id}/activate", response_model=InternshipTypeResponse)
async def activate_internship_type(
    internship_type_id: UUID,
    current_user: User = Depends(require_admin),
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    return await service.activate(internship_type_id)


@router.patch("/{internship_type_id}/deactivate", response_model=InternshipTypeResponse)
async def deactivate_internship_type(
    internship_type_id: UUID,
    current_user: User = Depends(require_admin),
    service: InternshipTypeService = Depends(get_internship_type_service),
):
    return await service.deactivate(internship_type_id)
