"""
Job management and the filtered, paginated job listing.

Every listing goes through ``JobService.search``: the filters of a ``JobQuery``
become one AND-ed predicate shared by the count query and the page query.
"""

import math
from typing import List
from uuid import UUID

import structlog
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cwie.core.exceptions import NotFoundError, UnprocessableError
from cwie.models.associations import job_departments, job_faculties
from cwie.models.company import Company
from cwie.models.enums import PublishStatus
from cwie.models.faculty import Department, Faculty
from cwie.models.industry import InternshipType
from cwie.models.job import Job
from cwie.models.user import User
from cwie.schemas.common import PaginationMeta
from cwie.schemas.job import (
    JobCreate,
    JobListResponse,
    JobQuery,
    JobResponse,
    JobUpdate,
    SortOrder,
)
from cwie.services.base import ensure_all_exist, get_or_404, replace_links, update_fields

logger = structlog.get_logger(__name__)

RELATION_FIELDS = {"faculty_ids", "department_ids"}
# Columns an update may clear with an explicit null
NULLABLE_FIELDS = {"description", "requirement", "payment", "payment_type"}


def build_job_filters(query: JobQuery) -> list:
    """Translate a job query into SQL predicates. Absent filters add nothing."""
    filters = []

    if query.search:
        # Wildcard characters in the search text match literally
        filters.append(
            or_(
                Job.name_th.icontains(query.search, autoescape=True),
                Job.name_en.icontains(query.search, autoescape=True),
            )
        )

    if query.company_id is not None:
        filters.append(Job.company_id == query.company_id)

    if query.internship_type_id is not None:
        filters.append(Job.internship_type_id == query.internship_type_id)

    # Faculty and department filters match jobs linked to ANY of the given ids
    if query.faculty_ids:
        filters.append(
            Job.id.in_(
                select(job_faculties.c.job_id).where(
                    job_faculties.c.faculty_id.in_(query.faculty_ids)
                )
            )
        )

    if query.department_ids:
        filters.append(
            Job.id.in_(
                select(job_departments.c.job_id).where(
                    job_departments.c.department_id.in_(query.department_ids)
                )
            )
        )

    if query.status is not None:
        filters.append(Job.status == query.status)

    if query.payment_type is not None:
        filters.append(Job.payment_type == query.payment_type)

    # Bounds are inclusive; a bound of 0 is a real bound
    if query.min_payment is not None:
        filters.append(Job.payment >= query.min_payment)

    if query.max_payment is not None:
        filters.append(Job.payment <= query.max_payment)

    if query.start_date_from is not None:
        filters.append(Job.start_date >= query.start_date_from)

    if query.end_date_to is not None:
        filters.append(Job.end_date <= query.end_date_to)

    if query.is_active is not None:
        filters.append(Job.is_active.is_(query.is_active))

    return filters


class JobService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Job).options(
            selectinload(Job.company),
            selectinload(Job.internship_type),
            selectinload(Job.faculties),
            selectinload(Job.departments),
        )

    async def search(self, query: JobQuery) -> JobListResponse:
        """Return one page of jobs matching the query plus pagination metadata."""
        filters = build_job_filters(query)

        count_result = await self.db.execute(
            select(func.count()).select_from(Job).where(*filters)
        )
        total = count_result.scalar_one()

        sort_column = getattr(Job, query.sort_by.value)
        order_clause = sort_column.desc() if query.sort_order == SortOrder.DESC else sort_column.asc()

        result = await self.db.execute(
            self._base_query()
            .where(*filters)
            .order_by(order_clause, Job.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        jobs = result.scalars().all()

        return JobListResponse(
            data=[JobResponse.model_validate(job) for job in jobs],
            meta=PaginationMeta(
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=math.ceil(total / query.limit),
            ),
        )

    async def list_by_company(self, company_id: UUID, query: JobQuery) -> JobListResponse:
        await get_or_404(self.db, Company, company_id, "Company")
        return await self.search(query.model_copy(update={"company_id": company_id}))

    async def list_by_internship_type(
        self, internship_type_id: UUID, query: JobQuery
    ) -> JobListResponse:
        await get_or_404(self.db, InternshipType, internship_type_id, "Internship type")
        return await self.search(query.model_copy(update={"internship_type_id": internship_type_id}))

    async def list_by_faculty(self, faculty_id: UUID, query: JobQuery) -> JobListResponse:
        await get_or_404(self.db, Faculty, faculty_id, "Faculty")
        return await self.search(query.model_copy(update={"faculty_ids": [faculty_id]}))

    async def list_by_department(self, department_id: UUID, query: JobQuery) -> JobListResponse:
        await get_or_404(self.db, Department, department_id, "Department")
        return await self.search(query.model_copy(update={"department_ids": [department_id]}))

    async def get(self, job_id: UUID) -> Job:
        result = await self.db.execute(
            self._base_query().where(Job.id == job_id).execution_options(populate_existing=True)
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError(f"Job with ID {job_id} not found")
        return job

    async def _set_relations(
        self, job_id: UUID, faculty_ids: List[UUID] | None, department_ids: List[UUID] | None
    ) -> None:
        if faculty_ids is not None:
            faculty_ids = await ensure_all_exist(self.db, Faculty, faculty_ids, "Faculty")
            await replace_links(self.db, job_faculties, "job_id", job_id, "faculty_id", faculty_ids)

        if department_ids is not None:
            department_ids = await ensure_all_exist(self.db, Department, department_ids, "Department")
            await replace_links(
                self.db, job_departments, "job_id", job_id, "department_id", department_ids
            )

    async def create(self, data: JobCreate, user: User) -> Job:
        """Create a job after checking every referenced entity exists."""
        await get_or_404(self.db, Company, data.company_id, "Company")
        await get_or_404(self.db, InternshipType, data.internship_type_id, "Internship type")

        job = Job(**data.model_dump(exclude=RELATION_FIELDS), created_by_id=user.id)
        self.db.add(job)
        await self.db.flush()

        await self._set_relations(job.id, data.faculty_ids, data.department_ids)
        await self.db.commit()

        logger.info("job_created", job_id=str(job.id), company_id=str(data.company_id))
        return await self.get(job.id)

    async def update(self, job_id: UUID, data: JobUpdate) -> Job:
        job = await get_or_404(self.db, Job, job_id, "Job")

        if data.company_id is not None:
            await get_or_404(self.db, Company, data.company_id, "Company")
        if data.internship_type_id is not None:
            await get_or_404(self.db, InternshipType, data.internship_type_id, "Internship type")

        changes = update_fields(data, NULLABLE_FIELDS, RELATION_FIELDS)
        start_date = changes.get("start_date", job.start_date)
        end_date = changes.get("end_date", job.end_date)
        if start_date and end_date and end_date < start_date:
            raise UnprocessableError("end_date must be on or after start_date")

        for field, value in changes.items():
            setattr(job, field, value)

        await self._set_relations(job_id, data.faculty_ids, data.department_ids)
        await self.db.commit()

        logger.info("job_updated", job_id=str(job_id))
        return await self.get(job_id)

    async def remove(self, job_id: UUID) -> None:
        await get_or_404(self.db, Job, job_id, "Job")

        await self.db.execute(delete(job_faculties).where(job_faculties.c.job_id == job_id))
        await self.db.execute(delete(job_departments).where(job_departments.c.job_id == job_id))
        await self.db.execute(delete(Job).where(Job.id == job_id))
        await self.db.commit()
        logger.info("job_deleted", job_id=str(job_id))

    # ==================== Status actions ====================

    async def set_status(self, job_id: UUID, status: PublishStatus) -> Job:
        job = await get_or_404(self.db, Job, job_id, "Job")
        job.status = status
        await self.db.commit()
        logger.info("job_status_changed", job_id=str(job_id), status=status.value)
        return await self.get(job_id)

    async def publish(self, job_id: UUID) -> Job:
        return await self.set_status(job_id, PublishStatus.PUBLISHED)

    async def draft(self, job_id: UUID) -> Job:
        return await self.set_status(job_id, PublishStatus.DRAFT)

    async def reject(self, job_id: UUID) -> Job:
        return await self.set_status(job_id, PublishStatus.REJECTED)

    async def set_active(self, job_id: UUID, is_active: bool) -> Job:
        job = await get_or_404(self.db, Job, job_id, "Job")
        job.is_active = is_active
        await self.db.commit()
        logger.info("job_activation_changed", job_id=str(job_id), is_active=is_active)
        return await self.get(job_id)

    async def activate(self, job_id: UUID) -> Job:
        return await self.set_active(job_id, True)

    async def deactivate(self, job_id: UUID) -> Job:
        return await self.set_active(job_id, False)
