"""Dashboard Service - derived statistics over admissions and staff"""

import asyncio
import logging
import math
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import AggregationFailure, Unauthenticated
from app.database import AsyncSessionLocal
from app.models.enums import AdmissionStatus, CLOSED_ADMISSION_STATUSES, DistributionField
from app.schemas.auth import CallerIdentity
from app.schemas.dashboard import (
    DashboardOverview,
    Distribution,
    DistributionEntry,
    GrowthStats,
    MonthlyTrend,
    OverviewCounts,
    QuickStats,
    RecentAdmission,
)
from app.services.admission_service import AdmissionService, ACTIVE_ONLY
from app.services.user_service import UserService
from app.utils.time import Clock, get_utc_now, shift_month, start_of_month, end_of_previous_month

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncSession]


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_growth(current: int, previous: int) -> float:
    """
    Percentage change from `previous` to `current`, one decimal place.

    0 when both are zero, 100 when only `previous` is zero.
    """
    if previous > 0:
        growth = (current - previous) / previous * 100
    elif current > 0:
        growth = 100.0
    else:
        growth = 0.0
    return round_half_up(growth, 1)


def build_monthly_trend(
    now: datetime,
    monthly_totals: List[tuple],
    months: int,
) -> List[MonthlyTrend]:
    """
    One entry per calendar month for the `months` months ending with the one
    containing `now`, oldest first. Months missing from `monthly_totals` are
    zero-filled.
    """
    totals = {(year, month): (count, revenue) for year, month, count, revenue in monthly_totals}
    trend = []
    for offset in range(months - 1, -1, -1):
        year, month = shift_month(now.year, now.month, -offset)
        count, revenue = totals.get((year, month), (0, 0))
        trend.append(
            MonthlyTrend(year=year, month=month, count=count, revenue=int(round_half_up(revenue)))
        )
    return trend


class DashboardService:
    """
    Builds dashboard reports.

    Every report issues its queries concurrently, each on its own session, and
    joins them before assembling the result. A failure in any query fails the
    whole report; nothing is retried or cached.
    """

    def __init__(
        self,
        session_factory: SessionFactory = AsyncSessionLocal,
        clock: Clock = get_utc_now,
        recent_limit: int = settings.DASHBOARD_RECENT_LIMIT,
        trend_months: int = settings.DASHBOARD_TREND_MONTHS,
    ):
        self.session_factory = session_factory
        self.clock = clock
        self.recent_limit = recent_limit
        self.trend_months = trend_months

    async def _query(self, query: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        async with self.session_factory() as session:
            return await query(session, *args, **kwargs)

    async def _gather(
        self,
        *queries: Awaitable[Any],
        failure_message: Optional[str] = None,
    ) -> List[Any]:
        results = await asyncio.gather(*queries, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                logger.error(
                    f"Dashboard query failed: {result}",
                    exc_info=(type(result), result, result.__traceback__),
                )
                raise AggregationFailure(result, failure_message) from result
        return results

    @staticmethod
    def _require_caller(caller: Optional[CallerIdentity]) -> CallerIdentity:
        if caller is None:
            raise Unauthenticated()
        return caller

    async def compute_overview(self, caller: Optional[CallerIdentity]) -> DashboardOverview:
        """
        Full dashboard report: headline counts, month-over-month growth,
        class/batch distributions, latest admissions and the trailing
        monthly trend.

        Raises:
            Unauthenticated: `caller` is None. No query is issued.
            AggregationFailure: any query failed.
        """
        caller = self._require_caller(caller)

        now = self.clock()
        month_start = start_of_month(now)
        last_month_start = start_of_month(now, -1)
        last_month_end = end_of_previous_month(now)
        trend_start = start_of_month(now, -(self.trend_months - 1))

        q = self._query
        (
            total_students,
            students_this_month,
            students_last_month,
            total_teachers,
            new_admissions_this_month,
            new_admissions_last_month,
            pending_admissions,
            inactive_students,
            (monthly_revenue, avg_monthly_fee),
            by_class,
            by_batch,
            recent,
            monthly_totals,
        ) = await self._gather(
            q(AdmissionService.count_admissions, statuses=ACTIVE_ONLY),
            q(AdmissionService.count_admissions, statuses=ACTIVE_ONLY, admitted_from=month_start),
            q(
                AdmissionService.count_admissions,
                statuses=ACTIVE_ONLY,
                admitted_from=last_month_start,
                admitted_to=last_month_end,
            ),
            q(UserService.count_staff),
            q(AdmissionService.count_admissions, admitted_from=month_start),
            q(
                AdmissionService.count_admissions,
                admitted_from=last_month_start,
                admitted_to=last_month_end,
            ),
            q(AdmissionService.count_admissions, statuses=(AdmissionStatus.PENDING,)),
            q(AdmissionService.count_admissions, statuses=CLOSED_ADMISSION_STATUSES),
            q(AdmissionService.get_fee_summary, ACTIVE_ONLY),
            q(AdmissionService.get_distribution, DistributionField.CLASS, ACTIVE_ONLY),
            q(AdmissionService.get_distribution, DistributionField.BATCH, ACTIVE_ONLY),
            q(AdmissionService.get_recent_admissions, self.recent_limit),
            q(AdmissionService.get_monthly_totals, trend_start),
        )

        report = DashboardOverview(
            overview=OverviewCounts(
                total_students=total_students,
                total_teachers=total_teachers,
                new_admissions_this_month=new_admissions_this_month,
                pending_admissions=pending_admissions,
                inactive_students=inactive_students,
                monthly_revenue=int(round_half_up(monthly_revenue)),
                avg_monthly_fee=int(round_half_up(avg_monthly_fee)),
            ),
            growth=GrowthStats(
                student_growth=calculate_growth(students_this_month, students_last_month),
                admission_growth=calculate_growth(new_admissions_this_month, new_admissions_last_month),
            ),
            distribution=Distribution(
                by_class=[DistributionEntry(key=key, count=count) for key, count in by_class],
                by_batch=[DistributionEntry(key=key, count=count) for key, count in by_batch],
            ),
            recent_admissions=[RecentAdmission.model_validate(row) for row in recent],
            monthly_trends=build_monthly_trend(now, monthly_totals, self.trend_months),
        )

        logger.info(
            "Dashboard overview computed",
            extra={"user_id": str(caller.user_id), "total_students": total_students},
        )
        return report

    async def compute_quick_stats(self, caller: Optional[CallerIdentity]) -> QuickStats:
        """
        Active, pending and staff counts for dashboard widgets.

        Raises:
            Unauthenticated: `caller` is None. No query is issued.
            AggregationFailure: any query failed.
        """
        self._require_caller(caller)

        total_active, total_pending, total_teachers = await self._gather(
            self._query(AdmissionService.count_admissions, statuses=ACTIVE_ONLY),
            self._query(AdmissionService.count_admissions, statuses=(AdmissionStatus.PENDING,)),
            self._query(UserService.count_staff),
            failure_message="Failed to fetch stats",
        )
        return QuickStats(
            total_active=total_active,
            total_pending=total_pending,
            total_teachers=total_teachers,
        )
