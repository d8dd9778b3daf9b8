"""Centralized Enum Definitions"""

import enum


# Users
class UserRole(str, enum.Enum):
    """User roles for RBAC"""
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


STAFF_ROLES = (UserRole.TEACHER, UserRole.ADMIN)


# Admissions
class AdmissionStatus(str, enum.Enum):
    """Admission lifecycle status"""
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"
    COMPLETED = "completed"


# Statuses that no longer count toward the enrolled headcount
CLOSED_ADMISSION_STATUSES = (AdmissionStatus.INACTIVE, AdmissionStatus.COMPLETED)


class DistributionField(str, enum.Enum):
    """Admission columns the dashboard groups by"""
    CLASS = "class"
    BATCH = "batch"
