"""User Model"""

from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import ENUM

from app.models.base import BaseModel, StatusMixin
from app.models.enums import UserRole


class User(BaseModel, StatusMixin):
    """
    Account record for students, teachers and admins.
    Credentials are owned by the identity service; this table only keeps
    what the school backend reads.
    """
    __tablename__ = "users"
    
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    
    # Role & Permissions (RBAC)
    role = Column(
        ENUM(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )
    
    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
