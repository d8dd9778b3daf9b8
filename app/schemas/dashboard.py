"""Dashboard schemas."""

from datetime import datetime
from typing import List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import AdmissionStatus


class OverviewCounts(BaseModel):
    """Headline counters. Monetary values are rounded to whole units."""

    total_students: int = Field(..., ge=0, description="Admissions with status ACTIVE")
    total_teachers: int = Field(..., ge=0, description="Active users with role teacher or admin")
    new_admissions_this_month: int = Field(
        ..., ge=0, description="Admissions of any status dated in the current month"
    )
    pending_admissions: int = Field(..., ge=0)
    inactive_students: int = Field(..., ge=0, description="Admissions that are INACTIVE or COMPLETED")
    monthly_revenue: int = Field(..., description="Sum of monthly fees over active admissions")
    avg_monthly_fee: int = Field(..., description="Average monthly fee over active admissions")


class GrowthStats(BaseModel):
    """Month-over-month change in percent, one decimal place"""

    student_growth: float
    admission_growth: float


class DistributionEntry(BaseModel):
    key: str
    count: int = Field(..., ge=0)


class Distribution(BaseModel):
    """Active admissions grouped by class and by batch, sorted by key"""

    by_class: List[DistributionEntry]
    by_batch: List[DistributionEntry]


class RecentAdmission(BaseModel):
    id: UUID
    name: str
    class_name: str
    batch: str
    admission_date: datetime
    status: AdmissionStatus

    model_config = ConfigDict(from_attributes=True)


class MonthlyTrend(BaseModel):
    year: int
    month: int = Field(..., ge=1, le=12)
    count: int = Field(..., ge=0)
    revenue: int


class DashboardOverview(BaseModel):
    """
    Composite dashboard report.
    Returned by GET /api/dashboard/overview.
    """

    overview: OverviewCounts
    growth: GrowthStats
    distribution: Distribution
    recent_admissions: List[RecentAdmission]
    monthly_trends: List[MonthlyTrend]


class QuickStats(BaseModel):
    """
    Widget counters.
    Returned by GET /api/dashboard/quick-stats.
    """

    total_active: int = Field(..., ge=0)
    total_pending: int = Field(..., ge=0)
    total_teachers: int = Field(..., ge=0)
