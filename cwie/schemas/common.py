"""Shared response schemas."""

from uuid import UUID

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class DeleteResponse(BaseModel):
    id: UUID
    deleted: bool = True


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""

    total: int
    page: int
    limit: int
    total_pages: int
