from uuid import UUID
from pydantic import BaseModel

from app.models.enums import UserRole, STAFF_ROLES


class CallerIdentity(BaseModel):
    """Identity resolved from a verified bearer token"""
    user_id: UUID
    role: UserRole

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
