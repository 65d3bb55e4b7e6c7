"""Industry endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from cwie.api.deps import get_industry_service, require_staff_or_admin
from cwie.models.user import User
from cwie.schemas.reference import IndustryCreate, IndustryResponse, IndustryUpdate
from cwie.services.industry_service import IndustryService

router = APIRouter()


@router.post("/", response_model=IndustryResponse, status_code=status.HTTP_201_CREATED)
async def create_industry(
    industry_in: IndustryCreate,
    current_user: User = Depends(require_staff_or_admin),
    service: IndustryService = Depends(get_industry_service),
):
    return await service.create(industry_in)


@router.get("/", response_model=List[IndustryResponse])
async def list_industries(service: IndustryService = Depends(get_industry_service)):
    """List active industries ordered by English name."""
    return await service.list()


@router.get("/{industry_id}", response_model=IndustryResponse)
async def get_industry(industry_id: UUID, service: IndustryService = Depends(get_industry_service)):
    return await service.get(industry_id)


@router.patch("/{industry_id}", response_model=IndustryResponse)
async def update_industry(
    industry_id: UUID,
    industry_in: IndustryUpdate,
    current_user: User = Depends(require_staff_or_admin),
    service: IndustryService = Depends(get_industry_service),
):
    return await service.update(industry_id, industry_in)


@router.delete("/{industry_id}", response_model=IndustryResponse)
async def delete_industry(
    industry_id: UUID,
    current_user: User = Depends(require_staff_or_admin),
    service: IndustryService = Depends(get_industry_service),
):
    """Soft delete: the industry is deactivated and hidden from listings."""
    return await service.remove(industry_id)
