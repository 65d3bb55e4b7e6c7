"""Reference tables: industries and internship types."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from cwie.db.base import Base


class Industry(Base):
    """Industry a company operates in. Soft-deleted through ``is_active``."""

    __tablename__ = "industries"

    name_th = Column(String(255), nullable=False)
    name_en = Column(String(255), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    companies = relationship("Company", back_populates="industry")

    def __repr__(self):
        return f"<Industry {self.name_en}>"


class InternshipType(Base):
    """Kind of internship a job is offered as."""

    __tablename__ = "internship_types"

    name_th = Column(String(255), nullable=False)
    name_en = Column(String(255), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    jobs = relationship("Job", back_populates="internship_type")

    def __repr__(self):
        return f"<InternshipType {self.name_en}>"
