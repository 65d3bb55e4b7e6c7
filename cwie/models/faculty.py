"""Faculty and department models."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from cwie.db.base import Base
from cwie.models.associations import user_departments


class Faculty(Base):
    """Top-level academic unit."""

    __tablename__ = "faculties"

    name_th = Column(String(255), nullable=False)
    name_en = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, index=True, nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    departments = relationship("Department", back_populates="faculty", order_by="Department.code")

    def __repr__(self):
        return f"<Faculty {self.code}>"


class Department(Base):
    """Department owned by exactly one faculty."""

    __tablename__ = "departments"

    name_th = Column(String(255), nullable=False)
    name_en = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, index=True, nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)
    faculty_id = Column(Uuid(as_uuid=True), ForeignKey("faculties.id"), nullable=False, index=True)

    # Relationships
    faculty = relationship("Faculty", back_populates="departments")
    users = relationship("User", secondary=user_departments, back_populates="departments")

    def __repr__(self):
        return f"<Department {self.code} of {self.faculty_id}>"
