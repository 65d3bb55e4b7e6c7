"""
Company management.

Companies link to faculties and departments through join tables and own their
contacts. Relation sets are replaced wholesale on update.
"""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cwie.core.exceptions import NotFoundError
from cwie.models.associations import company_departments, company_faculties
from cwie.models.company import Company, Contact
from cwie.models.enums import PublishStatus
from cwie.models.faculty import Department, Faculty
from cwie.models.industry import Industry
from cwie.models.user import User
from cwie.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    ContactCreate,
    ContactUpdate,
)
from cwie.services.base import ensure_all_exist, get_or_404, replace_links, update_fields

logger = structlog.get_logger(__name__)

RELATION_FIELDS = {"faculty_ids", "department_ids", "contacts"}
# Columns an update may clear with an explicit null
NULLABLE_FIELDS = {"latitude", "longitude", "email", "phone"}


class CompanyService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Company).options(
            selectinload(Company.industry),
            selectinload(Company.faculties),
            selectinload(Company.departments),
            selectinload(Company.contacts),
        )

    async def _set_relations(
        self,
        company_id: UUID,
        faculty_ids: Optional[List[UUID]],
        department_ids: Optional[List[UUID]],
        contacts: Optional[List[ContactCreate]],
    ) -> None:
        if faculty_ids is not None:
            faculty_ids = await ensure_all_exist(self.db, Faculty, faculty_ids, "Faculty")
            await replace_links(
                self.db, company_faculties, "company_id", company_id, "faculty_id", faculty_ids
            )

        if department_ids is not None:
            department_ids = await ensure_all_exist(self.db, Department, department_ids, "Department")
            await replace_links(
                self.db,
                company_departments,
                "company_id",
                company_id,
                "department_id",
                department_ids,
            )

        if contacts is not None:
            await self.db.execute(delete(Contact).where(Contact.company_id == company_id))
            for contact in contacts:
                self.db.add(Contact(company_id=company_id, **contact.model_dump()))

    async def create(self, data: CompanyCreate, user: User) -> Company:
        """Create a company on behalf of the current user."""
        await get_or_404(self.db, Industry, data.industry_id, "Industry")

        company = Company(
            **data.model_dump(exclude=RELATION_FIELDS),
            created_by_id=user.id,
        )
        self.db.add(company)
        await self.db.flush()

        await self._set_relations(company.id, data.faculty_ids, data.department_ids, data.contacts)
        await self.db.commit()

        logger.info("company_created", company_id=str(company.id), created_by=str(user.id))
        return await self.get(company.id)

    async def list(
        self,
        status: Optional[PublishStatus] = None,
        search: Optional[str] = None,
        industry_id: Optional[UUID] = None,
        faculty_id: Optional[UUID] = None,
        department_id: Optional[UUID] = None,
        skip: int = 0,
        take: int = 10,
    ) -> List[Company]:
        """List active companies, newest first."""
        filters = [Company.is_active.is_(True)]

        if status is not None:
            filters.append(Company.status == status)

        if search:
            filters.append(
                or_(
                    *(
                        column.icontains(search, autoescape=True)
                        for column in (
                            Company.name_th,
                            Company.name_en,
                            Company.address,
                            Company.province,
                        )
                    )
                )
            )

        if industry_id is not None:
            filters.append(Company.industry_id == industry_id)

        if faculty_id is not None:
            filters.append(
                Company.id.in_(
                    select(company_faculties.c.company_id).where(
                        company_faculties.c.faculty_id == faculty_id
                    )
                )
            )

        if department_id is not None:
            filters.append(
                Company.id.in_(
                    select(company_departments.c.company_id).where(
                        company_departments.c.department_id == department_id
                    )
                )
            )

        result = await self.db.execute(
            self._base_query()
            .where(*filters)
            .order_by(Company.created_at.desc())
            .offset(skip)
            .limit(take)
        )
        return list(result.scalars().all())

    async def get(self, company_id: UUID) -> Company:
        result = await self.db.execute(
            self._base_query()
            .where(Company.id == company_id)
            .execution_options(populate_existing=True)
        )
        company = result.scalar_one_or_none()
        if company is None:
            raise NotFoundError(f"Company with ID {company_id} not found")
        return company

    async def update(self, company_id: UUID, data: CompanyUpdate) -> Company:
        """Update scalar fields and replace the supplied relation sets in one transaction."""
        company = await get_or_404(self.db, Company, company_id, "Company")

        if data.industry_id is not None:
            await get_or_404(self.db, Industry, data.industry_id, "Industry")

        for field, value in update_fields(data, NULLABLE_FIELDS, RELATION_FIELDS).items():
            setattr(company, field, value)

        await self._set_relations(company_id, data.faculty_ids, data.department_ids, data.contacts)
        await self.db.commit()

        logger.info("company_updated", company_id=str(company_id))
        return await self.get(company_id)

    async def remove(self, company_id: UUID) -> None:
        """Delete a company together with its contacts. Its jobs go by foreign-key cascade."""
        await get_or_404(self.db, Company, company_id, "Company")

        await self.db.execute(delete(Contact).where(Contact.company_id == company_id))
        await self.db.execute(delete(Company).where(Company.id == company_id))
        await self.db.commit()
        logger.info("company_deleted", company_id=str(company_id))

    async def update_status(self, company_id: UUID, status: PublishStatus) -> Company:
        company = await get_or_404(self.db, Company, company_id, "Company")
        company.status = status
        await self.db.commit()
        logger.info("company_status_updated", company_id=str(company_id), status=status.value)
        return await self.get(company_id)

    # ==================== Contacts ====================

    async def list_contacts(self, company_id: UUID) -> List[Contact]:
        await get_or_404(self.db, Company, company_id, "Company")
        result = await self.db.execute(
            select(Contact).where(Contact.company_id == company_id).order_by(Contact.created_at)
        )
        return list(result.scalars().all())

    async def add_contact(self, company_id: UUID, data: ContactCreate) -> Contact:
        await get_or_404(self.db, Company, company_id, "Company")
        contact = Contact(company_id=company_id, **data.model_dump())
        self.db.add(contact)
        await self.db.commit()
        return contact

    async def update_contact(self, contact_id: UUID, data: ContactUpdate) -> Contact:
        contact = await get_or_404(self.db, Contact, contact_id, "Contact")
        for field, value in update_fields(data).items():
            setattr(contact, field, value)
        await self.db.commit()
        return contact

    async def remove_contact(self, contact_id: UUID) -> None:
        await get_or_404(self.db, Contact, contact_id, "Contact")
        await self.db.execute(delete(Contact).where(Contact.id == contact_id))
        await self.db.commit()
