"""Company and contact endpoints. Mutations require an authenticated user."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from cwie.api.deps import get_company_service, get_current_user
from cwie.models.enums import PublishStatus
from cwie.models.user import User
from cwie.schemas.common import DeleteResponse
from cwie.schemas.company import (
    CompanyCreate,
    CompanyResponse,
    CompanyStatusUpdate,
    CompanyUpdate,
    ContactCreate,
    ContactResponse,
    ContactUpdate,
)
from cwie.services.company_service import CompanyService

router = APIRouter()


@router.post("/", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    company_in: CompanyCreate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """Create a company with its faculty/department links and contacts."""
    return await service.create(company_in, current_user)


@router.get("/", response_model=List[CompanyResponse])
async def list_companies(
    status: Optional[PublishStatus] = Query(None, description="Filter by publication status"),
    search: Optional[str] = Query(None, description="Search in names, address and province"),
    industry_id: Optional[UUID] = None,
    faculty_id: Optional[UUID] = None,
    department_id: Optional[UUID] = None,
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1, le=100),
    service: CompanyService = Depends(get_company_service),
):
    """
    List active companies, newest first

    **Filters**:
    - `status`: draft, published, rejected
    - `search`: Case-insensitive match on Thai/English name, address or province
    - `industry_id`, `faculty_id`, `department_id`: Related entity
    """
    return await service.list(
        status=status,
        search=search,
        industry_id=industry_id,
        faculty_id=faculty_id,
        department_id=department_id,
        skip=skip,
        take=take,
    )


# Contact routes are declared before "/{company_id}" so the literal segment wins
@router.patch("/contacts/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: UUID,
    contact_in: ContactUpdate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return await service.update_contact(contact_id, contact_in)


@router.delete("/contacts/{contact_id}", response_model=DeleteResponse)
async def delete_contact(
    contact_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    await service.remove_contact(contact_id)
    return DeleteResponse(id=contact_id)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: UUID, service: CompanyService = Depends(get_company_service)):
    return await service.get(company_id)


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: UUID,
    company_in: CompanyUpdate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """
    Update a company

    `faculty_ids`, `department_ids` and `contacts` replace the stored sets when present.
    """
    return await service.update(company_id, company_in)


@router.delete("/{company_id}", response_model=DeleteResponse)
async def delete_company(
    company_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    """Delete a company, its contacts and its jobs."""
    await service.remove(company_id)
    return DeleteResponse(id=company_id)


@router.patch("/{company_id}/status", response_model=CompanyResponse)
async def update_company_status(
    company_id: UUID,
    status_in: CompanyStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return await service.update_status(company_id, status_in.status)


@router.get("/{company_id}/contacts", response_model=List[ContactResponse])
async def list_contacts(company_id: UUID, service: CompanyService = Depends(get_company_service)):
    return await service.list_contacts(company_id)


@router.post(
    "/{company_id}/contacts",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_contact(
    company_id: UUID,
    contact_in: ContactCreate,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
):
    return await service.add_contact(company_id, contact_in)
