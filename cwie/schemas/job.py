"""Job schemas for API requests and responses."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cwie.config import settings
from cwie.models.enums import PaymentType, PublishStatus
from cwie.schemas.common import PaginationMeta
from cwie.schemas.company import CompanyBrief
from cwie.schemas.faculty import DepartmentBrief, FacultyBrief
from cwie.schemas.reference import InternshipTypeResponse


class JobSortField(str, Enum):
    """Columns a job listing may be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    NAME_TH = "name_th"
    NAME_EN = "name_en"
    PAYMENT = "payment"
    START_DATE = "start_date"
    END_DATE = "end_date"
    POSITION_COUNT = "position_count"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _check_period(start: Optional[datetime], end: Optional[datetime]) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError("end_date must be on or after start_date")


class JobCreate(BaseModel):
    """Job creation payload."""

    name_th: str = Field(..., min_length=1, examples=["โปรแกรมเมอร์ฝึกงาน"])
    name_en: str = Field(..., min_length=1, examples=["Internship Programmer"])
    description: Optional[str] = None
    requirement: Optional[str] = None
    payment: Optional[float] = Field(None, ge=0, examples=[15000])
    payment_type: Optional[PaymentType] = None
    start_date: datetime
    end_date: datetime
    position_count: int = Field(1, gt=0)
    company_id: UUID
    internship_type_id: UUID
    faculty_ids: List[UUID] = Field(default_factory=list)
    department_ids: List[UUID] = Field(default_factory=list)
    is_active: bool = True

    @model_validator(mode="after")
    def check_period(self):
        _check_period(self.start_date, self.end_date)
        return self


class JobUpdate(BaseModel):
    """Partial update. A relation list that is present replaces the stored set."""

    name_th: Optional[str] = Field(None, min_length=1)
    name_en: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    requirement: Optional[str] = None
    payment: Optional[float] = Field(None, ge=0)
    payment_type: Optional[PaymentType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    position_count: Optional[int] = Field(None, gt=0)
    company_id: Optional[UUID] = None
    internship_type_id: Optional[UUID] = None
    faculty_ids: Optional[List[UUID]] = None
    department_ids: Optional[List[UUID]] = None
    status: Optional[PublishStatus] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def check_period(self):
        _check_period(self.start_date, self.end_date)
        return self


class JobQuery(BaseModel):
    """Filters, pagination and ordering for job listings. Every filter is optional."""

    search: Optional[str] = None
    company_id: Optional[UUID] = None
    internship_type_id: Optional[UUID] = None
    faculty_ids: List[UUID] = Field(default_factory=list)
    department_ids: List[UUID] = Field(default_factory=list)
    status: Optional[PublishStatus] = None
    payment_type: Optional[PaymentType] = None
    min_payment: Optional[float] = Field(None, ge=0)
    max_payment: Optional[float] = Field(None, ge=0)
    start_date_from: Optional[datetime] = None
    end_date_to: Optional[datetime] = None
    is_active: Optional[bool] = None
    page: int = Field(1, ge=1)
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE)
    sort_by: JobSortField = JobSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @model_validator(mode="after")
    def check_payment_bounds(self):
        if (
            self.min_payment is not None
            and self.max_payment is not None
            and self.min_payment > self.max_payment
        ):
            raise ValueError("min_payment must not exceed max_payment")
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class JobResponse(BaseModel):
    """Job with its company, internship type and academic targeting."""

    id: UUID
    name_th: str
    name_en: str
    description: Optional[str] = None
    requirement: Optional[str] = None
    payment: Optional[float] = None
    payment_type: Optional[PaymentType] = None
    start_date: datetime
    end_date: datetime
    position_count: int
    status: PublishStatus
    is_active: bool
    company_id: UUID
    internship_type_id: UUID
    created_by_id: Optional[UUID] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    company: Optional[CompanyBrief] = None
    internship_type: Optional[InternshipTypeResponse] = None
    faculties: List[FacultyBrief] = Field(default_factory=list)
    departments: List[DepartmentBrief] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class JobListResponse(BaseModel):
    """Response for paginated job list."""

    data: List[JobResponse]
    meta: PaginationMeta
