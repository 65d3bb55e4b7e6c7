"""Enumerated column values shared across models and schemas."""

from enum import Enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, Enum):
    """User roles."""

    STUDENT = "student"
    TEACHER = "teacher"
    COMPANY = "company"
    ADMIN = "admin"
    SUPER_ADMIN = "superadmin"
    STAFF = "staff"


class PublishStatus(str, Enum):
    """Publication lifecycle of companies and jobs."""

    DRAFT = "draft"
    PUBLISHED = "published"
    REJECTED = "rejected"


class PaymentType(str, Enum):
    NONE = "none"
    DAY = "day"
    MONTH = "month"
    LUMP_SUM = "lump_sum"


def enum_type(enum_cls: type[Enum]) -> SAEnum:
    """Store enum values (not member names) as plain strings."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
    )
