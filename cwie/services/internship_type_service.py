"""Internship type reference data."""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cwie.models.industry import InternshipType
from cwie.models.job import Job
from cwie.schemas.reference import InternshipTypeCreate, InternshipTypeUpdate
from cwie.services.base import count_where, get_or_404, update_fields

logger = structlog.get_logger(__name__)


class InternshipTypeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: InternshipTypeCreate) -> InternshipType:
        internship_type = InternshipType(**data.model_dump())
        self.db.add(internship_type)
        await self.db.commit()
        logger.info("internship_type_created", internship_type_id=str(internship_type.id))
        return internship_type

    async def list(self, is_active: Optional[bool] = None) -> List[InternshipType]:
        query = select(InternshipType)
        if is_active is not None:
            query = query.where(InternshipType.is_active.is_(is_active))
        result = await self.db.execute(query.order_by(InternshipType.name_en))
        return list(result.scalars().all())

    async def get(self, internship_type_id: UUID) -> InternshipType:
        return await get_or_404(self.db, InternshipType, internship_type_id, "Internship type")

    async def update(self, internship_type_id: UUID, data: InternshipTypeUpdate) -> InternshipType:
        internship_type = await self.get(internship_type_id)
        for field, value in update_fields(data).items():
            setattr(internship_type, field, value)
        await self.db.commit()
        logger.info("internship_type_updated", internship_type_id=str(internship_type_id))
        return internship_type

    async def remove(self, internship_type_id: UUID) -> bool:
        """
        Remove an internship type.

        Returns True when the row was deleted, False when it is still referenced
        by jobs and was deactivated instead.
        """
        internship_type = await self.get(internship_type_id)

        jobs = await count_where(self.db, Job, Job.internship_type_id == internship_type_id)
        if jobs:
            internship_type.is_active = False
            await self.db.commit()
            logger.info(
                "internship_type_deactivated",
                internship_type_id=str(internship_type_id),
                job_count=jobs,
            )
            return False

        await self.db.execute(delete(InternshipType).where(InternshipType.id == internship_type_id))
        await self.db.commit()
        logger.info("internship_type_deleted", internship_type_id=str(internship_type_id))
        return True

    async def set_active(self, internship_type_id: UUID, is_active: bool) -> InternshipType:
        internship_type = await self.get(internship_type_id)
        internship_type.is_active = is_active
        await self.db.commit()
        return internship_type

    async def activate(self, internship_type_id: UUID) -> InternshipType:
        return await self.set_active(internship_type_id, True)

    async def deactivate(self, internship_type_id: UUID) -> InternshipType:
        return await self.set_active(internship_type_id, False)
