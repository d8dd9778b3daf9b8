"""User Service - Business Logic Layer"""

from typing import Optional
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.models.user import User
from app.models.enums import STAFF_ROLES

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user-related operations"""
    
    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.
        
        Args:
            db: Database session
            user_id: User ID
            
        Returns:
            User or None if not found
        """
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()
    
    @staticmethod
    async def count_staff(db: AsyncSession) -> int:
        """Count active users with a teacher or admin role."""
        result = await db.execute(
            select(func.count(User.id)).where(
                User.role.in_(STAFF_ROLES),
                User.is_active.is_(True),
            )
        )
        return result.scalar_one()
