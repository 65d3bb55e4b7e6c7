"""Faculty and department schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FacultyBrief(BaseModel):
    """Brief faculty information."""

    id: UUID
    name_th: str
    name_en: str
    code: str

    model_config = ConfigDict(from_attributes=True)


class DepartmentBrief(BaseModel):
    """Brief department information."""

    id: UUID
    name_th: str
    name_en: str
    code: str
    faculty_id: UUID

    model_config = ConfigDict(from_attributes=True)


class FacultyCreate(BaseModel):
    name_th: str = Field(..., min_length=1, examples=["คณะวิศวกรรมศาสตร์"])
    name_en: str = Field(..., min_length=1, examples=["Faculty of Engineering"])
    code: str = Field(..., min_length=1, examples=["ENG"])
    description: Optional[str] = None


class FacultyUpdate(BaseModel):
    name_th: Optional[str] = Field(None, min_length=1)
    name_en: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class FacultyResponse(FacultyBrief):
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    departments: List[DepartmentBrief] = Field(default_factory=list)


class DepartmentCreate(BaseModel):
    name_th: str = Field(..., min_length=1, examples=["วิศวกรรมคอมพิวเตอร์"])
    name_en: str = Field(..., min_length=1, examples=["Computer Engineering"])
    code: str = Field(..., min_length=1, examples=["CPE"])
    description: Optional[str] = None
    faculty_id: UUID


class DepartmentUpdate(BaseModel):
    name_th: Optional[str] = Field(None, min_length=1)
    name_en: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    faculty_id: Optional[UUID] = None


class DepartmentResponse(DepartmentBrief):
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    faculty: FacultyBrief
