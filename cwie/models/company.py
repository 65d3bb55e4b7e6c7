"""Company model."""

from sqlalchemy import Boolean, Column, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from cwie.db.base import Base
from cwie.models.associations import company_departments, company_faculties
from cwie.models.enums import PublishStatus, enum_type


class Company(Base):
    """Employer offering internship jobs."""

    __tablename__ = "companies"

    name_th = Column(String(255), nullable=False, index=True)
    name_en = Column(String(255), nullable=False, index=True)

    # Address
    address = Column(Text, nullable=False)
    sub_district = Column(String(255), nullable=False)
    district = Column(String(255), nullable=False)
    province = Column(String(255), nullable=False)
    postcode = Column(String(20), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Contact info
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    # Status
    status = Column(enum_type(PublishStatus), nullable=False, default=PublishStatus.DRAFT)
    is_active = Column(Boolean, default=True, nullable=False)

    industry_id = Column(Uuid(as_uuid=True), ForeignKey("industries.id"), nullable=False)
    created_by_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    industry = relationship("Industry", back_populates="companies")
    created_by = relationship("User")
    faculties = relationship("Faculty", secondary=company_faculties)
    departments = relationship("Department", secondary=company_departments)
    contacts = relationship(
        "Contact",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Contact.created_at",
    )
    jobs = relationship("Job", back_populates="company", passive_deletes=True)

    def __repr__(self):
        return f"<Company {self.name_en}>"


class Contact(Base):
    """Contact person of a company."""

    __tablename__ = "contacts"

    firstname = Column(String(150), nullable=False)
    lastname = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    company_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company = relationship("Company", back_populates="contacts")

    def __repr__(self):
        return f"<Contact {self.firstname} {self.lastname}>"
