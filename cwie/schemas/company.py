"""Company and contact schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from cwie.models.enums import PublishStatus
from cwie.schemas.faculty import DepartmentBrief, FacultyBrief
from cwie.schemas.reference import IndustryResponse


class ContactCreate(BaseModel):
    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)


class ContactUpdate(BaseModel):
    firstname: Optional[str] = Field(None, min_length=1)
    lastname: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)


class ContactResponse(BaseModel):
    id: UUID
    firstname: str
    lastname: str
    email: str
    phone: str
    company_id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompanyCreate(BaseModel):
    """Company creation payload. Relation ids are connected, contacts are created."""

    name_th: str = Field(..., min_length=1, examples=["บริษัท เอบีซี จำกัด"])
    name_en: str = Field(..., min_length=1, examples=["ABC Company Limited"])
    industry_id: UUID
    address: str = Field(..., min_length=1)
    sub_district: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1)
    province: str = Field(..., min_length=1)
    postcode: str = Field(..., min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    status: PublishStatus = PublishStatus.DRAFT
    faculty_ids: List[UUID] = Field(default_factory=list)
    department_ids: List[UUID] = Field(default_factory=list)
    contacts: List[ContactCreate] = Field(default_factory=list)


class CompanyUpdate(BaseModel):
    """Partial update. A relation list that is present replaces the stored set."""

    name_th: Optional[str] = Field(None, min_length=1)
    name_en: Optional[str] = Field(None, min_length=1)
    industry_id: Optional[UUID] = None
    address: Optional[str] = Field(None, min_length=1)
    sub_district: Optional[str] = Field(None, min_length=1)
    district: Optional[str] = Field(None, min_length=1)
    province: Optional[str] = Field(None, min_length=1)
    postcode: Optional[str] = Field(None, min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    status: Optional[PublishStatus] = None
    is_active: Optional[bool] = None
    faculty_ids: Optional[List[UUID]] = None
    department_ids: Optional[List[UUID]] = None
    contacts: Optional[List[ContactCreate]] = None


class CompanyStatusUpdate(BaseModel):
    status: PublishStatus


class CompanyBrief(BaseModel):
    """Brief company information."""

    id: UUID
    name_th: str
    name_en: str
    province: str
    status: PublishStatus

    model_config = ConfigDict(from_attributes=True)


class CompanyResponse(CompanyBrief):
    address: str
    sub_district: str
    district: str
    postcode: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    industry_id: UUID
    created_by_id: Optional[UUID] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    industry: Optional[IndustryResponse] = None
    faculties: List[FacultyBrief] = Field(default_factory=list)
    departments: List[DepartmentBrief] = Field(default_factory=list)
    contacts: List[ContactResponse] = Field(default_factory=list)
