"""
Department management.

Privileged roles may change any department. A teacher may change departments
of a faculty they are affiliated with through one of their own departments.
"""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cwie.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from cwie.core.security import PRIVILEGED_ROLES
from cwie.models.associations import user_departments
from cwie.models.enums import UserRole
from cwie.models.faculty import Department, Faculty
from cwie.models.user import User
from cwie.schemas.faculty import DepartmentCreate, DepartmentUpdate
from cwie.services.base import commit_or_conflict, count_where, get_or_404, update_fields

logger = structlog.get_logger(__name__)


class DepartmentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def check_permission(self, user: User, faculty_id: UUID) -> None:
        """Raise Forbidden unless the user may manage departments of the faculty."""
        if user.role in PRIVILEGED_ROLES:
            return

        if user.role == UserRole.TEACHER:
            result = await self.db.execute(
                select(Department.id)
                .join(user_departments, user_departments.c.department_id == Department.id)
                .where(
                    user_departments.c.user_id == user.id,
                    Department.faculty_id == faculty_id,
                )
                .limit(1)
            )
            if result.first() is not None:
                return

        logger.warning(
            "department_permission_denied",
            user_id=str(user.id),
            role=str(user.role),
            faculty_id=str(faculty_id),
        )
        raise ForbiddenError("You do not have permission to manage departments of this faculty")

    async def create(self, data: DepartmentCreate, user: User) -> Department:
        await get_or_404(self.db, Faculty, data.faculty_id, "Faculty")
        await self.check_permission(user, data.faculty_id)

        department = Department(**data.model_dump())
        self.db.add(department)
        await commit_or_conflict(self.db, f"Department code {data.code} already exists")
        logger.info("department_created", department_id=str(department.id), code=department.code)
        return await self.get(department.id)

    async def list(self, faculty_id: Optional[UUID] = None) -> List[Department]:
        query = select(Department).options(selectinload(Department.faculty))
        if faculty_id is not None:
            query = query.where(Department.faculty_id == faculty_id)
        result = await self.db.execute(query.order_by(Department.code))
        return list(result.scalars().all())

    async def list_by_faculty(self, faculty_id: UUID) -> List[Department]:
        await get_or_404(self.db, Faculty, faculty_id, "Faculty")
        return await self.list(faculty_id)

    async def get(self, department_id: UUID) -> Department:
        result = await self.db.execute(
            select(Department)
            .options(selectinload(Department.faculty))
            .where(Department.id == department_id)
            .execution_options(populate_existing=True)
        )
        department = result.scalar_one_or_none()
        if department is None:
            raise NotFoundError(f"Department with ID {department_id} not found")
        return department

    async def update(self, department_id: UUID, data: DepartmentUpdate, user: User) -> Department:
        department = await get_or_404(self.db, Department, department_id, "Department")
        await self.check_permission(user, department.faculty_id)

        if data.faculty_id is not None and data.faculty_id != department.faculty_id:
            await get_or_404(self.db, Faculty, data.faculty_id, "Faculty")
            await self.check_permission(user, data.faculty_id)

        for field, value in update_fields(data, nullable={"description"}).items():
            setattr(department, field, value)

        await commit_or_conflict(self.db, "Department code already exists")
        logger.info("department_updated", department_id=str(department_id))
        return await self.get(department_id)

    async def remove(self, department_id: UUID, user: User) -> None:
        """Delete a department nobody is affiliated with."""
        department = await get_or_404(self.db, Department, department_id, "Department")
        await self.check_permission(user, department.faculty_id)

        members = await count_where(
            self.db, user_departments, user_departments.c.department_id == department_id
        )
        if members:
            raise ConflictError(
                f"Department still has {members} associated user(s) and cannot be deleted"
            )

        await self.db.execute(delete(Department).where(Department.id == department_id))
        await self.db.commit()
        logger.info("department_deleted", department_id=str(department_id))
