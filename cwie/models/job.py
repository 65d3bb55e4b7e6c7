"""Job model."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from cwie.db.base import Base
from cwie.models.associations import job_departments, job_faculties
from cwie.models.enums import PaymentType, PublishStatus, enum_type


class Job(Base):
    """Internship job posting."""

    __tablename__ = "jobs"

    name_th = Column(String(500), nullable=False, index=True)
    name_en = Column(String(500), nullable=False, index=True)
    description = Column(Text)
    requirement = Column(Text)

    # Compensation
    payment = Column(Float, nullable=True, index=True)
    payment_type = Column(enum_type(PaymentType), nullable=True)

    # Period
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False, index=True)
    position_count = Column(Integer, default=1, nullable=False)

    # Status (publication and activation are independent)
    status = Column(enum_type(PublishStatus), nullable=False, default=PublishStatus.DRAFT)
    is_active = Column(Boolean, default=True, nullable=False)

    company_id = Column(
        Uuid(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    internship_type_id = Column(
        Uuid(as_uuid=True), ForeignKey("internship_types.id"), nullable=False
    )
    created_by_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    company = relationship("Company", back_populates="jobs")
    internship_type = relationship("InternshipType", back_populates="jobs")
    created_by = relationship("User")
    faculties = relationship("Faculty", secondary=job_faculties)
    departments = relationship("Department", secondary=job_departments)

    def __repr__(self):
        return f"<Job {self.name_en} at {self.company_id}>"
