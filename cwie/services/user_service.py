"""User profile management."""

from typing import List
from uuid import UUID

import structlog
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cwie.core.exceptions import ConflictError, NotFoundError
from cwie.core.security import get_password_hash
from cwie.models.associations import user_departments
from cwie.models.user import User
from cwie.schemas.auth import UpdateUserRequest
from cwie.services.base import update_fields

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, user_id: UUID) -> User:
        result = await self.db.execute(
            select(User).options(selectinload(User.departments)).where(User.id == user_id)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_user(self, user_id: UUID, data: UpdateUserRequest) -> User:
        """Apply a partial update. Email and username must stay unique."""
        user = await self.get_profile(user_id)
        changes = update_fields(data)

        unique_checks = []
        if changes.get("email") is not None:
            unique_checks.append(User.email == changes["email"])
        if changes.get("username") is not None:
            unique_checks.append(User.username == changes["username"])

        if unique_checks:
            result = await self.db.execute(
                select(User.id).where(or_(*unique_checks), User.id != user_id)
            )
            if result.first() is not None:
                raise ConflictError("Email or username already in use")

        password = changes.pop("password", None)
        if password:
            user.password_hash = get_password_hash(password)

        for field, value in changes.items():
            setattr(user, field, value)

        await self.db.commit()
        logger.info("user_updated", user_id=str(user_id), fields=sorted(data.model_fields_set))
        return await self.get_profile(user_id)

    async def delete_user(self, user_id: UUID) -> None:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")

        await self.db.execute(delete(user_departments).where(user_departments.c.user_id == user_id))
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        logger.info("user_deleted", user_id=str(user_id))

    async def list_users(self) -> List[User]:
        result = await self.db.execute(
            select(User).options(selectinload(User.departments)).order_by(User.username)
        )
        return list(result.scalars().all())
