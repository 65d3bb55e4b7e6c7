"""Industry and internship type schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReferenceCreate(BaseModel):
    name_th: str = Field(..., min_length=1, description="Thai name")
    name_en: str = Field(..., min_length=1, description="English name")
    is_active: bool = True


class ReferenceUpdate(BaseModel):
    name_th: Optional[str] = Field(None, min_length=1)
    name_en: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class ReferenceResponse(BaseModel):
    id: UUID
    name_th: str
    name_en: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class IndustryCreate(ReferenceCreate):
    pass


class IndustryUpdate(ReferenceUpdate):
    pass


class IndustryResponse(ReferenceResponse):
    pass


class InternshipTypeCreate(ReferenceCreate):
    pass


class InternshipTypeUpdate(ReferenceUpdate):
    pass


class InternshipTypeResponse(ReferenceResponse):
    pass
