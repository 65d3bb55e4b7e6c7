"""Job endpoints - Browse, search and manage internship jobs."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from cwie.api.deps import get_job_service, require_admin, require_job_editor
from cwie.config import settings
from cwie.models.enums import PaymentType, PublishStatus
from cwie.models.user import User
from cwie.schemas.common import DeleteResponse
from cwie.schemas.job import (
    JobCreate,
    JobListResponse,
    JobQuery,
    JobResponse,
    JobSortField,
    JobUpdate,
    SortOrder,
)
from cwie.services.job_service import JobService

router = APIRouter()


def job_query_params(
    search: Optional[str] = Query(None, description="Search in Thai or English job name"),
    company_id: Optional[UUID] = Query(None, description="Filter by company ID"),
    internship_type_id: Optional[UUID] = Query(None, description="Filter by internship type ID"),
    faculty_ids: List[UUID] = Query([], description="Jobs linked to any of these faculties"),
    department_ids: List[UUID] = Query([], description="Jobs linked to any of these departments"),
    status: Optional[PublishStatus] = Query(None, description="draft, published, rejected"),
    payment_type: Optional[PaymentType] = Query(None, description="none, day, month, lump_sum"),
    min_payment: Optional[float] = Query(None, ge=0, description="Minimum payment (inclusive)"),
    max_payment: Optional[float] = Query(None, ge=0, description="Maximum payment (inclusive)"),
    start_date_from: Optional[datetime] = Query(None, description="Jobs starting on or after"),
    end_date_to: Optional[datetime] = Query(None, description="Jobs ending on or before"),
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"
    ),
    sort_by: JobSortField = Query(JobSortField.CREATED_AT, description="Sort field"),
    sort_order: SortOrder = Query(SortOrder.DESC, description="Sort order (asc, desc)"),
) -> JobQuery:
    """Collect listing parameters into a validated JobQuery."""
    try:
        return JobQuery(
            search=search,
            company_id=company_id,
            internship_type_id=internship_type_id,
            faculty_ids=faculty_ids,
            department_ids=department_ids,
            status=status,
            payment_type=payment_type,
            min_payment=min_payment,
            max_payment=max_payment,
            start_date_from=start_date_from,
            end_date_to=end_date_to,
            is_active=is_active,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


@router.post("/", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_in: JobCreate,
    current_user: User = Depends(require_job_editor),
    service: JobService = Depends(get_job_service),
):
    """
    Create a job

    **RBAC**: SuperAdmin, Admin, Company
    """
    return await service.create(job_in, current_user)


@router.get("/", response_model=JobListResponse)
async def list_jobs(
    query: JobQuery = Depends(job_query_params),
    service: JobService = Depends(get_job_service),
):
    """
    Get paginated list of jobs with filters

    **Filters:**
    - `search`: Case-insensitive match on Thai or English name
    - `company_id`, `internship_type_id`: Exact match
    - `faculty_ids`, `department_ids`: Repeatable, matches jobs linked to any
    - `status`, `payment_type`, `is_active`: Exact match
    - `min_payment`, `max_payment`: Inclusive payment range
    - `start_date_from`, `end_date_to`: Period bounds

    **Sorting:**
    - `sort_by`: created_at, updated_at, name_th, name_en, payment, start_date, end_date, position_count
    - `sort_order`: asc, desc (default: desc)

    **Examples:**
    ```
    GET /api/jobs/?min_payment=15000&max_payment=30000
    GET /api/jobs/?faculty_ids=<uuid>&faculty_ids=<uuid>&page=2&limit=20
    ```
    """
    return await service.search(query)


@router.get("/company/{owner_company_id}", response_model=JobListResponse)
async def list_jobs_by_company(
    owner_company_id: UUID,
    query: JobQuery = Depends(job_query_params),
    service: JobService = Depends(get_job_service),
):
    return await service.list_by_company(owner_company_id, query)


@router.get("/internship-type/{owner_type_id}", response_model=JobListResponse)
async def list_jobs_by_internship_type(
    owner_type_id: UUID,
    query: JobQuery = Depends(job_query_params),
    service: JobService = Depends(get_job_service),
):
    return await service.list_by_internship_type(owner_type_id, query)


@router.get("/faculty/{faculty_id}", response_model=JobListResponse)
async def list_jobs_by_faculty(
    faculty_id: UUID,
    query: JobQuery = Depends(job_query_params),
    service: JobService = Depends(get_job_service),
):
    return await service.list_by_faculty(faculty_id, query)


@router.get("/department/{department_id}", response_model=JobListResponse)
async def list_jobs_by_department(
    department_id: UUID,
    query: JobQuery = Depends(job_query_params),
    service: JobService = Depends(get_job_service),
):
    return await service.list_by_department(department_id, query)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: UUID, service: JobService = Depends(get_job_service)):
    return await service.get(job_id)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: UUID,
    job_in: JobUpdate,
    current_user: User = Depends(require_job_editor),
    service: JobService = Depends(get_job_service),
):
    """
    Update a job

    `faculty_ids` and `department_ids` replace the stored sets when present.
    """
    return await service.update(job_id, job_in)


@router.delete("/{job_id}", response_model=DeleteResponse)
async def delete_job(
    job_id: UUID,
    current_user: User = Depends(require_admin),
    service: JobService = Depends(get_job_service),
):
    await service.remove(job_id)
    return DeleteResponse(id=job_id)


# ==================== Status actions ====================

@router.patch("/{job_id}/publish", response_model=JobResponse)
async def publish_job(
    job_id: UUID,
    current_user: User = Depends(require_job_editor),
    service: JobService = Depends(get_job_service),
):
    return await service.publish(job_id)


@router.patch("/{job_id}/draft", response_model=JobResponse)
async def draft_job(
    job_id: UUID,
    current_user: User = Depends(require_job_editor),
    service: JobService = Depends(get_job_service),
):
    return await service.draft(job_id)


@router.patch("/{job_id}/reject", response_model=JobResponse)
async def reject_job(
    job_id: UUID,
    current_user: User = Depends(require_admin),
    service: JobService = Depends(get_job_service),
):
    """**RBAC**: SuperAdmin, Admin"""
    return await service.reject(job_id)


@router.patch("/{job_id}/activate", response_model=JobResponse)
async def activate_job(
    job_id: UUID,
    current_user: User = Depends(require_job_editor),
    service: JobService = Depends(get_job_service),
):
    return await service.activate(job_id)


@router.patch("/{job_id}/deactivate", response_model=JobResponse)
async def deactivate_job(
    job_id: UUID,
    current_user: User = Depends(require_job_editor),
    service: JobService = Depends(get_job_service),
):
    return await service.deactivate(job_id)
