"""User model."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from cwie.db.base import Base
from cwie.models.associations import user_departments
from cwie.models.enums import UserRole, enum_type


class User(Base):
    """User model for authentication."""

    __tablename__ = "users"

    username = Column(String(150), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    firstname = Column(String(150), nullable=True)
    lastname = Column(String(150), nullable=True)
    role = Column(enum_type(UserRole), nullable=False, default=UserRole.STUDENT)
    password_hash = Column(String(255), nullable=False)
    # bcrypt hash of the current refresh token, null when no session is active
    refresh_token_hash = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    departments = relationship("Department", secondary=user_departments, back_populates="users")

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"
