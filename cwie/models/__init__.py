"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from cwie.models.user import User
from cwie.models.faculty import Faculty, Department
from cwie.models.industry import Industry, InternshipType

# Models with foreign keys to base models
from cwie.models.company import Company, Contact
from cwie.models.job import Job

# Join tables
from cwie.models.associations import (
    company_departments,
    company_faculties,
    job_departments,
    job_faculties,
    user_departments,
)

# Export all models
__all__ = [
    "User",
    "Faculty",
    "Department",
    "Industry",
    "InternshipType",
    "Company",
    "Contact",
    "Job",
    "user_departments",
    "company_faculties",
    "company_departments",
    "job_faculties",
    "job_departments",
]
