"""Helpers shared by the services."""

from typing import AbstractSet, Any, Dict, Iterable, List, Sequence, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Table, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cwie.core.exceptions import ConflictError, NotFoundError
from cwie.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


def update_fields(
    data: BaseModel,
    nullable: AbstractSet[str] = frozenset(),
    exclude: AbstractSet[str] = frozenset(),
) -> Dict[str, Any]:
    """Fields an update request sets. An explicit null counts only for nullable columns."""
    return {
        field: value
        for field, value in data.model_dump(exclude_unset=True, exclude=set(exclude)).items()
        if value is not None or field in nullable
    }


async def get_or_404(db: AsyncSession, model: Type[ModelType], obj_id: UUID, label: str) -> ModelType:
    obj = await db.get(model, obj_id)
    if obj is None:
        raise NotFoundError(f"{label} with ID {obj_id} not found")
    return obj


async def ensure_all_exist(
    db: AsyncSession, model: Type[Base], ids: Iterable[UUID], label: str
) -> List[UUID]:
    """Return the de-duplicated ids, raising NotFound for the first missing one."""
    unique_ids = list(dict.fromkeys(ids))
    if not unique_ids:
        return unique_ids

    result = await db.execute(select(model.id).where(model.id.in_(unique_ids)))
    found = set(result.scalars().all())
    for obj_id in unique_ids:
        if obj_id not in found:
            raise NotFoundError(f"{label} with ID {obj_id} not found")
    return unique_ids


async def replace_links(
    db: AsyncSession,
    table: Table,
    owner_column: str,
    owner_id: UUID,
    target_column: str,
    target_ids: Sequence[UUID],
) -> None:
    """Replace the link set of one owner: delete all rows, then insert the new ones."""
    await db.execute(delete(table).where(table.c[owner_column] == owner_id))
    if target_ids:
        await db.execute(
            insert(table),
            [{owner_column: owner_id, target_column: target_id} for target_id in target_ids],
        )


async def count_where(db: AsyncSession, source, *criteria) -> int:
    result = await db.execute(select(func.count()).select_from(source).where(*criteria))
    return result.scalar_one()


async def commit_or_conflict(db: AsyncSession, message: str) -> None:
    """Commit, surfacing unique-constraint violations as Conflict."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(message) from e
