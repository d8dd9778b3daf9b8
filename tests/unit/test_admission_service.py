"""Unit tests for AdmissionService (mocked session; aggregate SQL compiled for PostgreSQL)."""

from datetime import datetime, timezone, timedelta
from decimal import Decimal
import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.admission import Admission
from app.models.enums import AdmissionStatus, DistributionField
from app.schemas.admission import AdmissionCreate
from app.services.admission_service import AdmissionService, ACTIVE_ONLY


@pytest.mark.asyncio
async def test_create_admission_defaults_date_and_status():
    db = AsyncMock(spec=AsyncSession)
    admission_in = AdmissionCreate(name="Asha", class_name="10", batch="2024", monthly_fee=Decimal("1200"))

    admission = await AdmissionService.create_admission(db, admission_in)

    assert isinstance(admission, Admission)
    assert admission.status == AdmissionStatus.PENDING
    assert admission.admission_date is not None
    assert admission.admission_date.tzinfo is None
    db.add.assert_called_once_with(admission)
    assert db.commit.called
    assert db.refresh.called


@pytest.mark.asyncio
async def test_create_admission_normalizes_aware_dates_to_utc():
    db = AsyncMock(spec=AsyncSession)
    admitted = datetime(2024, 3, 1, 2, 0, tzinfo=timezone(timedelta(hours=5)))
    admission_in = AdmissionCreate(
        name="Bilal", class_name="9", batch="2024", status=AdmissionStatus.ACTIVE, admission_date=admitted
    )

    admission = await AdmissionService.create_admission(db, admission_in)

    assert admission.admission_date == datetime(2024, 2, 29, 21, 0)
    assert admission.status == AdmissionStatus.ACTIVE


@pytest.mark.asyncio
async def test_update_status():
    db = AsyncMock(spec=AsyncSession)
    admission = Admission(
        name="Chen", class_name="10", batch="2023",
        status=AdmissionStatus.ACTIVE, admission_date=datetime(2024, 1, 1),
    )

    result = await AdmissionService.update_status(db, admission, AdmissionStatus.COMPLETED)

    assert result is admission
    assert admission.status == AdmissionStatus.COMPLETED
    assert db.commit.called


def _session_returning(**methods) -> AsyncMock:
    """Mocked session whose execute() result answers `methods` (e.g. all=[...])."""
    result = MagicMock()
    for name, value in methods.items():
        getattr(result, name).return_value = value
    db = AsyncMock(spec=AsyncSession)
    db.execute.return_value = result
    return db


def _compiled(db: AsyncMock):
    statement = db.execute.call_args.args[0]
    return statement.compile(dialect=postgresql.dialect())


def _bound_value(compiled, pattern: str):
    match = re.search(pattern + r" %\((\w+)\)s", str(compiled))
    assert match, str(compiled)
    return compiled.params[match.group(1)]


@pytest.mark.asyncio
async def test_count_admissions_bounds_are_inclusive():
    db = _session_returning(scalar_one=3)
    start = datetime(2024, 2, 1)
    end = datetime(2024, 2, 29, 23, 59, 59, 999999)

    count = await AdmissionService.count_admissions(
        db, statuses=ACTIVE_ONLY, admitted_from=start, admitted_to=end
    )

    assert count == 3
    compiled = _compiled(db)
    assert _bound_value(compiled, r"admissions\.admission_date >=") == start
    assert _bound_value(compiled, r"admissions\.admission_date <=") == end
    assert "admissions.status IN" in str(compiled)


@pytest.mark.asyncio
async def test_count_admissions_without_filters_has_no_where_clause():
    db = _session_returning(scalar_one=0)

    await AdmissionService.count_admissions(db)

    assert "WHERE" not in str(_compiled(db))


@pytest.mark.asyncio
async def test_distribution_orders_keys_by_code_point():
    db = _session_returning(all=[("10", 2), ("9", 1)])

    rows = await AdmissionService.get_distribution(db, DistributionField.CLASS, ACTIVE_ONLY)

    assert rows == [("10", 2), ("9", 1)]
    sql = str(_compiled(db))
    assert re.search(r'GROUP BY admissions\."?class"?', sql), sql
    assert re.search(r'ORDER BY admissions\."?class"? COLLATE "?C"? ASC', sql), sql


@pytest.mark.asyncio
async def test_batch_distribution_uses_batch_column():
    db = _session_returning(all=[])

    assert await AdmissionService.get_distribution(db, DistributionField.BATCH) == []
    sql = str(_compiled(db))
    assert re.search(r'ORDER BY admissions\.batch COLLATE "?C"? ASC', sql), sql


@pytest.mark.asyncio
async def test_recent_admissions_break_date_ties_by_id():
    db = _session_returning(all=[])

    await AdmissionService.get_recent_admissions(db, limit=5)

    compiled = _compiled(db)
    sql = str(compiled)
    assert "ORDER BY admissions.admission_date DESC, admissions.id DESC" in sql
    assert _bound_value(compiled, "LIMIT") == 5


@pytest.mark.asyncio
async def test_monthly_totals_group_by_calendar_month():
    db = _session_returning(all=[(2024.0, 2.0, 2, 1500.5), (2024.0, 3.0, 1, None)])
    since = datetime(2023, 10, 1)

    totals = await AdmissionService.get_monthly_totals(db, since)

    assert totals == [(2024, 2, 2, 1500.5), (2024, 3, 1, 0.0)]
    compiled = _compiled(db)
    sql = str(compiled)
    assert re.search(r"EXTRACT\(year FROM admissions\.admission_date", sql), sql
    assert re.search(r"EXTRACT\(month FROM admissions\.admission_date", sql), sql
    assert "GROUP BY" in sql
    assert _bound_value(compiled, r"admissions\.admission_date >=") == since
