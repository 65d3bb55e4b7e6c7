"""Faculty management."""

from typing import List
from uuid import UUID

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cwie.core.exceptions import ConflictError, NotFoundError
from cwie.models.faculty import Department, Faculty
from cwie.schemas.faculty import FacultyCreate, FacultyUpdate
from cwie.services.base import commit_or_conflict, count_where, get_or_404, update_fields

logger = structlog.get_logger(__name__)


class FacultyService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: FacultyCreate) -> Faculty:
        faculty = Faculty(**data.model_dump())
        self.db.add(faculty)
        await commit_or_conflict(self.db, f"Faculty code {data.code} already exists")
        logger.info("faculty_created", faculty_id=str(faculty.id), code=faculty.code)
        return await self.get(faculty.id)

    async def list(self) -> List[Faculty]:
        result = await self.db.execute(
            select(Faculty).options(selectinload(Faculty.departments)).order_by(Faculty.code)
        )
        return list(result.scalars().all())

    async def get(self, faculty_id: UUID) -> Faculty:
        result = await self.db.execute(
            select(Faculty)
            .options(selectinload(Faculty.departments))
            .where(Faculty.id == faculty_id)
            .execution_options(populate_existing=True)
        )
        faculty = result.scalar_one_or_none()
        if faculty is None:
            raise NotFoundError(f"Faculty with ID {faculty_id} not found")
        return faculty

    async def update(self, faculty_id: UUID, data: FacultyUpdate) -> Faculty:
        faculty = await get_or_404(self.db, Faculty, faculty_id, "Faculty")

        for field, value in update_fields(data, nullable={"description"}).items():
            setattr(faculty, field, value)

        await commit_or_conflict(self.db, "Faculty code already exists")
        logger.info("faculty_updated", faculty_id=str(faculty_id))
        return await self.get(faculty_id)

    async def remove(self, faculty_id: UUID) -> None:
        """Delete a faculty that no longer owns any department."""
        await get_or_404(self.db, Faculty, faculty_id, "Faculty")

        departments = await count_where(self.db, Department, Department.faculty_id == faculty_id)
        if departments:
            raise ConflictError(
                f"Faculty still has {departments} department(s) and cannot be deleted"
            )

        await self.db.execute(delete(Faculty).where(Faculty.id == faculty_id))
        await self.db.commit()
        logger.info("faculty_deleted", faculty_id=str(faculty_id))
