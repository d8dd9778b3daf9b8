"""Integration tests: dashboard aggregates computed by PostgreSQL (requires DATABASE_URL)."""

import uuid
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.database import Base, connect_args, database_url
from app.models.admission import Admission
from app.models.enums import AdmissionStatus, UserRole
from app.schemas.auth import CallerIdentity
from app.services.dashboard_service import DashboardService
from tests.conftest import requires_db

# Far enough ahead that no other test data lands in the reported months
CLOCK_NOW = datetime(2091, 3, 15, 9, 30)


@pytest.fixture
async def seeded(unique_suffix: str):
    """Admissions around the February/March 2091 boundary, removed afterwards."""
    engine = create_async_engine(database_url, connect_args=connect_args, poolclass=NullPool)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    s = unique_suffix
    rows = [
        # (name, class, batch, status, admission_date, fee)
        ("march-2", f"{s}-B", f"{s}-2091", AdmissionStatus.ACTIVE, datetime(2091, 3, 2), "1000"),
        ("march-1", f"{s}-A", f"{s}-2091", AdmissionStatus.ACTIVE, datetime(2091, 3, 1), "300"),
        (
            "feb-last-instant", f"{s}-a", f"{s}-2090", AdmissionStatus.ACTIVE,
            datetime(2091, 2, 28, 23, 59, 59, 999999), "500.50",
        ),
        ("feb-first", f"{s}-a", f"{s}-2090", AdmissionStatus.ACTIVE, datetime(2091, 2, 1), "100"),
        ("december", f"{s}-B", f"{s}-2090", AdmissionStatus.PENDING, datetime(2090, 12, 10), "200"),
    ]
    async with session_factory() as session:
        session.add_all(
            Admission(
                name=f"{s}-{name}", class_name=class_name, batch=batch,
                status=status, admission_date=admitted, monthly_fee=Decimal(fee),
            )
            for name, class_name, batch, status, admitted, fee in rows
        )
        await session.commit()

    yield session_factory

    async with session_factory() as session:
        await session.execute(delete(Admission).where(Admission.name.like(f"{s}-%")))
        await session.commit()
    await engine.dispose()


@pytest.fixture
def caller() -> CallerIdentity:
    return CallerIdentity(user_id=uuid.uuid4(), role=UserRole.ADMIN)


@requires_db
@pytest.mark.asyncio
async def test_last_instant_of_previous_month_counts_toward_growth(seeded, caller):
    service = DashboardService(session_factory=seeded, clock=lambda: CLOCK_NOW)

    report = await service.compute_overview(caller)

    # 2 active this month vs 2 last month; dropping 23:59:59.999999 would give 100.0
    assert report.growth.student_growth == 0.0
    assert report.growth.admission_growth == 0.0


@requires_db
@pytest.mark.asyncio
async def test_distribution_keys_sort_by_code_point(seeded, caller, unique_suffix):
    service = DashboardService(session_factory=seeded, clock=lambda: CLOCK_NOW)

    report = await service.compute_overview(caller)

    s = unique_suffix
    by_class = [(e.key, e.count) for e in report.distribution.by_class if e.key.startswith(s)]
    by_batch = [(e.key, e.count) for e in report.distribution.by_batch if e.key.startswith(s)]
    assert by_class == [(f"{s}-A", 1), (f"{s}-B", 1), (f"{s}-a", 2)]
    assert by_batch == [(f"{s}-2090", 2), (f"{s}-2091", 2)]
    all_keys = [e.key for e in report.distribution.by_class]
    assert all_keys == sorted(all_keys)


@requires_db
@pytest.mark.asyncio
async def test_monthly_trend_is_zero_filled(seeded, caller):
    service = DashboardService(session_factory=seeded, clock=lambda: CLOCK_NOW)

    report = await service.compute_overview(caller)

    assert [(t.year, t.month, t.count, t.revenue) for t in report.monthly_trends] == [
        (2090, 10, 0, 0),
        (2090, 11, 0, 0),
        (2090, 12, 1, 200),
        (2091, 1, 0, 0),
        (2091, 2, 2, 601),
        (2091, 3, 2, 1300),
    ]


@requires_db
@pytest.mark.asyncio
async def test_recent_admissions_newest_first(seeded, caller, unique_suffix):
    service = DashboardService(session_factory=seeded, clock=lambda: CLOCK_NOW)

    report = await service.compute_overview(caller)

    assert [r.name for r in report.recent_admissions] == [
        f"{unique_suffix}-{name}"
        for name in ("march-2", "march-1", "feb-last-instant", "feb-first", "december")
    ]
