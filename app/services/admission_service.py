"""Admission Service - intake, status changes and read-side aggregates"""

from datetime import datetime, timezone
from typing import Optional, List, Tuple, Dict, Any, Sequence
from uuid import UUID
from sqlalchemy import select, func, extract
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.models.admission import Admission
from app.models.enums import AdmissionStatus, DistributionField
from app.schemas.admission import AdmissionCreate
from app.utils.time import get_utc_now

logger = logging.getLogger(__name__)

ACTIVE_ONLY = (AdmissionStatus.ACTIVE,)

_DISTRIBUTION_COLUMNS = {
    DistributionField.CLASS: Admission.class_name,
    DistributionField.BATCH: Admission.batch,
}


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _admission_filters(
    statuses: Optional[Sequence[AdmissionStatus]],
    admitted_from: Optional[datetime],
    admitted_to: Optional[datetime],
) -> list:
    conditions = []
    if statuses is not None:
        conditions.append(Admission.status.in_(statuses))
    if admitted_from is not None:
        conditions.append(Admission.admission_date >= admitted_from)
    if admitted_to is not None:
        conditions.append(Admission.admission_date <= admitted_to)
    return conditions


class AdmissionService:
    """Service layer for admission records"""

    @staticmethod
    async def create_admission(db: AsyncSession, admission_in: AdmissionCreate) -> Admission:
        """
        Record a new admission. `admission_date` defaults to now (naive UTC).
        """
        data = admission_in.model_dump()
        admission_date = data.pop("admission_date") or get_utc_now()
        admission = Admission(**data, admission_date=_to_naive_utc(admission_date))
        db.add(admission)
        await db.commit()
        await db.refresh(admission)
        logger.info(
            "Admission created",
            extra={"admission_id": str(admission.id), "status": admission.status.value},
        )
        return admission

    @staticmethod
    async def get_admission_by_id(db: AsyncSession, admission_id: UUID) -> Optional[Admission]:
        result = await db.execute(select(Admission).where(Admission.id == admission_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_admissions(
        db: AsyncSession,
        status: Optional[AdmissionStatus] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Admission], int]:
        """
        Get a page of admissions, newest first.
        
        Returns:
            Tuple of (admissions on the page, total matching count)
        """
        conditions = _admission_filters([status] if status else None, None, None)

        count_result = await db.execute(select(func.count(Admission.id)).where(*conditions))
        total = count_result.scalar_one()

        result = await db.execute(
            select(Admission)
            .where(*conditions)
            .order_by(Admission.admission_date.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def update_status(
        db: AsyncSession,
        admission: Admission,
        status: AdmissionStatus,
    ) -> Admission:
        """Move an admission to a new status. Records are never deleted."""
        previous = admission.status
        admission.status = status
        await db.commit()
        await db.refresh(admission)
        logger.info(
            "Admission status changed",
            extra={
                "admission_id": str(admission.id),
                "from_status": previous.value if previous else None,
                "to_status": status.value,
            },
        )
        return admission

    # ------------------------------------------------------------------
    # Read-only aggregates used by the dashboard
    # ------------------------------------------------------------------

    @staticmethod
    async def count_admissions(
        db: AsyncSession,
        statuses: Optional[Sequence[AdmissionStatus]] = None,
        admitted_from: Optional[datetime] = None,
        admitted_to: Optional[datetime] = None,
    ) -> int:
        """
        Count admissions matching every given filter.
        `admitted_from` and `admitted_to` are both inclusive; None means unbounded.
        """
        result = await db.execute(
            select(func.count(Admission.id)).where(
                *_admission_filters(statuses, admitted_from, admitted_to)
            )
        )
        return result.scalar_one()

    @staticmethod
    async def get_fee_summary(
        db: AsyncSession,
        statuses: Sequence[AdmissionStatus] = ACTIVE_ONLY,
    ) -> Tuple[float, float]:
        """Return (sum, average) of monthly fees; (0, 0) when nothing matches."""
        result = await db.execute(
            select(
                func.sum(Admission.monthly_fee),
                func.avg(Admission.monthly_fee),
            ).where(Admission.status.in_(statuses))
        )
        total, average = result.one()
        return float(total or 0), float(average or 0)

    @staticmethod
    async def get_distribution(
        db: AsyncSession,
        field: DistributionField,
        statuses: Sequence[AdmissionStatus] = ACTIVE_ONLY,
    ) -> List[Tuple[str, int]]:
        """
        Group admissions by `field`; one (key, count) pair per key.
        Keys sort by code point (collation "C"), independent of the database locale.
        """
        column = _DISTRIBUTION_COLUMNS[field]
        result = await db.execute(
            select(column, func.count(Admission.id))
            .where(Admission.status.in_(statuses))
            .group_by(column)
            .order_by(column.collate("C").asc())
        )
        return [(key, count) for key, count in result.all()]

    @staticmethod
    async def get_recent_admissions(db: AsyncSession, limit: int = 5) -> List[Dict[str, Any]]:
        """Latest admissions by admission date, projected to the dashboard fields."""
        result = await db.execute(
            select(
                Admission.id.label("id"),
                Admission.name.label("name"),
                Admission.class_name.label("class_name"),
                Admission.batch.label("batch"),
                Admission.admission_date.label("admission_date"),
                Admission.status.label("status"),
            )
            .order_by(Admission.admission_date.desc(), Admission.id.desc())
            .limit(limit)
        )
        return [dict(row._mapping) for row in result.all()]

    @staticmethod
    async def get_monthly_totals(
        db: AsyncSession,
        since: datetime,
    ) -> List[Tuple[int, int, int, float]]:
        """
        Admissions of any status dated on or after `since`, bucketed by
        calendar month.

        Returns:
            (year, month, count, fee_total) tuples in chronological order.
            Months without admissions are absent.
        """
        year = extract("year", Admission.admission_date)
        month = extract("month", Admission.admission_date)
        result = await db.execute(
            select(
                year.label("year"),
                month.label("month"),
                func.count(Admission.id),
                func.sum(Admission.monthly_fee),
            )
            .where(Admission.admission_date >= since)
            .group_by(year, month)
            .order_by(year, month)
        )
        return [
            (int(y), int(m), count, float(revenue or 0))
            for y, m, count, revenue in result.all()
        ]
