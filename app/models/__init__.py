"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, StatusMixin
from app.models.enums import *
from app.models.user import User
from app.models.admission import Admission


__all__ = [
    # Base classes
    "BaseModel",
    "StatusMixin",
    
    # Enums
    "UserRole",
    "AdmissionStatus",
    "DistributionField",
    "STAFF_ROLES",
    "CLOSED_ADMISSION_STATUSES",
    
    # Users
    "User",
    
    # Admissions
    "Admission",
]
