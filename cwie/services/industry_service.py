"""Industry reference data. Removal is a soft delete."""

from typing import List
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cwie.models.industry import Industry
from cwie.schemas.reference import IndustryCreate, IndustryUpdate
from cwie.services.base import get_or_404, update_fields

logger = structlog.get_logger(__name__)


class IndustryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: IndustryCreate) -> Industry:
        industry = Industry(**data.model_dump())
        self.db.add(industry)
        await self.db.commit()
        logger.info("industry_created", industry_id=str(industry.id))
        return industry

    async def list(self) -> List[Industry]:
        result = await self.db.execute(
            select(Industry).where(Industry.is_active.is_(True)).order_by(Industry.name_en)
        )
        return list(result.scalars().all())

    async def get(self, industry_id: UUID) -> Industry:
        return await get_or_404(self.db, Industry, industry_id, "Industry")

    async def update(self, industry_id: UUID, data: IndustryUpdate) -> Industry:
        industry = await self.get(industry_id)
        for field, value in update_fields(data).items():
            setattr(industry, field, value)
        await self.db.commit()
        logger.info("industry_updated", industry_id=str(industry_id))
        return industry

    async def remove(self, industry_id: UUID) -> Industry:
        industry = await self.get(industry_id)
        industry.is_active = False
        await self.db.commit()
        logger.info("industry_deactivated", industry_id=str(industry_id))
        return industry
