"""Many-to-many join tables."""

from sqlalchemy import Column, ForeignKey, Table, Uuid

from cwie.db.base import Base


def _join_table(name: str, left: str, right: str) -> Table:
    left_table, left_column = left.split(".")
    right_table, right_column = right.split(".")
    return Table(
        name,
        Base.metadata,
        Column(
            left_column,
            Uuid(as_uuid=True),
            ForeignKey(f"{left_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            right_column,
            Uuid(as_uuid=True),
            ForeignKey(f"{right_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


# User affiliation with departments (teacher permissions, department delete guard)
user_departments = _join_table("user_departments", "users.user_id", "departments.department_id")

company_faculties = _join_table("company_faculties", "companies.company_id", "faculties.faculty_id")
company_departments = _join_table(
    "company_departments", "companies.company_id", "departments.department_id"
)

job_faculties = _join_table("job_faculties", "jobs.job_id", "faculties.faculty_id")
job_departments = _join_table("job_departments", "jobs.job_id", "departments.department_id")
