"""Admin-task report service.

Loads fire drill, evacuation/disaster drill and oversight training reports,
converts them into RecurringTaskEvents for the requirement engine, and
handles guarded submission and deletion.
"""

import logging
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bhrf.models.admin_task import (
    EvacuationDrillReport,
    FireDrillReport,
    OversightTrainingReport,
)
from bhrf.models.enums import DrillType, FireDrillType, Shift, TaskType

from .duplicates import check_duplicate, duplicate_message
from .errors import DuplicateSubmissionError
from .periods import (
    BiWeekBucket,
    MonthBucket,
    QuarterBucket,
    bi_week_bucket_of,
    bi_week_range_label,
    bucket_to_dict,
    current_period,
    elapsed_buckets,
    month_bucket_of,
    period_label,
    quarter_bucket_of,
)
from .requirements import (
    OutstandingShifts,
    RecurringTaskEvent,
    SubmissionKey,
    completion_rate,
    outstanding,
    period_history,
    requirement_for,
)

logger = logging.getLogger(__name__)

DRILL_TASK_TYPES = {
    DrillType.EVACUATION: TaskType.EVACUATION_DRILL,
    DrillType.DISASTER: TaskType.DISASTER_DRILL,
}


# ---------------------------------------------------------------------------
# Row -> event
# ---------------------------------------------------------------------------

def fire_drill_event(r: FireDrillReport) -> RecurringTaskEvent:
    return RecurringTaskEvent(
        facility_id=r.facility_id,
        task_type=TaskType.FIRE_DRILL,
        bucket=MonthBucket(year=r.report_year, month=r.report_month),
        shift=r.shift,
        submitted_at=r.created_at,
        id=r.id,
    )


def evacuation_drill_event(r: EvacuationDrillReport) -> RecurringTaskEvent:
    return RecurringTaskEvent(
        facility_id=r.facility_id,
        task_type=DRILL_TASK_TYPES[r.drill_type],
        bucket=QuarterBucket(year=r.year, quarter=r.quarter),
        shift=r.shift,
        submitted_at=r.created_at,
        id=r.id,
    )


def oversight_training_event(r: OversightTrainingReport) -> RecurringTaskEvent:
    return RecurringTaskEvent(
        facility_id=r.facility_id,
        task_type=TaskType.OVERSIGHT_TRAINING,
        bucket=BiWeekBucket(year=r.year, bi_week=r.bi_week),
        shift=None,
        submitted_at=r.created_at,
        id=r.id,
    )


async def load_events(
    db: AsyncSession,
    facility_id: str,
    task_type: TaskType | None = None,
) -> list[RecurringTaskEvent]:
    """Load a facility's reports as engine events, optionally for one task type."""
    events: list[RecurringTaskEvent] = []

    if task_type in (None, TaskType.FIRE_DRILL):
        result = await db.execute(
            select(FireDrillReport).where(FireDrillReport.facility_id == facility_id)
        )
        events.extend(fire_drill_event(r) for r in result.scalars().all())

    if task_type in (None, TaskType.EVACUATION_DRILL, TaskType.DISASTER_DRILL):
        query = select(EvacuationDrillReport).where(
            EvacuationDrillReport.facility_id == facility_id
        )
        if task_type == TaskType.EVACUATION_DRILL:
            query = query.where(EvacuationDrillReport.drill_type == DrillType.EVACUATION)
        elif task_type == TaskType.DISASTER_DRILL:
            query = query.where(EvacuationDrillReport.drill_type == DrillType.DISASTER)
        result = await db.execute(query)
        events.extend(evacuation_drill_event(r) for r in result.scalars().all())

    if task_type in (None, TaskType.OVERSIGHT_TRAINING):
        result = await db.execute(
            select(OversightTrainingReport).where(
                OversightTrainingReport.facility_id == facility_id
            )
        )
        events.extend(oversight_training_event(r) for r in result.scalars().all())

    return events


# ---------------------------------------------------------------------------
# Guarded submission
# ---------------------------------------------------------------------------

async def _guarded_insert(db: AsyncSession, key: SubmissionKey, report):
    """Insert a report unless one already exists for the same key.

    The pre-check gives the friendly message; a unique-constraint violation
    from a concurrent insert is reported the same way.
    """
    existing = await load_events(db, key.facility_id, key.task_type)
    check = check_duplicate(key, existing)
    message = duplicate_message(key)
    if not check.ok:
        logger.warning(
            "Duplicate %s for facility %s rejected (%s, existing %s)",
            key.task_type.value, key.facility_id,
            period_label(key.bucket), check.duplicate.id,
        )
        raise DuplicateSubmissionError(message, check.duplicate)

    db.add(report)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.warning(
            "Unique constraint rejected %s for facility %s (%s)",
            key.task_type.value, key.facility_id, period_label(key.bucket),
        )
        raise DuplicateSubmissionError(message)

    await db.refresh(report)
    logger.info(
        "Created %s report %s for facility %s (%s%s)",
        key.task_type.value, report.id, key.facility_id,
        period_label(key.bucket),
        f", {key.shift.value} shift" if key.shift else "",
    )
    return report


async def submit_fire_drill(
    db: AsyncSession,
    facility_id: str,
    *,
    drill_date: date,
    shift: Shift,
    drill_type: FireDrillType,
    conducted_by: str,
    drill_time: str | None = None,
    details: dict | None = None,
    submitted_by: str | None = None,
) -> FireDrillReport:
    bucket = month_bucket_of(drill_date)
    report = FireDrillReport(
        facility_id=facility_id,
        report_year=bucket.year,
        report_month=bucket.month,
        shift=shift,
        drill_date=drill_date,
        drill_time=drill_time,
        drill_type=drill_type,
        conducted_by=conducted_by,
        details=details,
        submitted_by=submitted_by,
    )
    key = SubmissionKey(facility_id, TaskType.FIRE_DRILL, bucket, shift)
    return await _guarded_insert(db, key, report)


async def submit_evacuation_drill(
    db: AsyncSession,
    facility_id: str,
    *,
    drill_type: DrillType,
    drill_date: date,
    shift: Shift,
    drill_time: str | None = None,
    disaster_drill_type: str | None = None,
    conducted_by: str | None = None,
    details: dict | None = None,
    submitted_by: str | None = None,
) -> EvacuationDrillReport:
    bucket = quarter_bucket_of(drill_date)
    report = EvacuationDrillReport(
        facility_id=facility_id,
        drill_type=drill_type,
        year=bucket.year,
        quarter=bucket.quarter,
        shift=shift,
        drill_date=drill_date,
        drill_time=drill_time,
        disaster_drill_type=disaster_drill_type,
        conducted_by=conducted_by,
        details=details,
        submitted_by=submitted_by,
    )
    key = SubmissionKey(facility_id, DRILL_TASK_TYPES[drill_type], bucket, shift)
    return await _guarded_insert(db, key, report)


async def submit_oversight_training(
    db: AsyncSession,
    facility_id: str,
    *,
    training_date: date,
    conducted_by: str,
    participants: list | None = None,
    notes: str | None = None,
    submitted_by: str | None = None,
) -> OversightTrainingReport:
    bucket = bi_week_bucket_of(training_date)
    report = OversightTrainingReport(
        facility_id=facility_id,
        year=bucket.year,
        bi_week=bucket.bi_week,
        training_date=training_date,
        conducted_by=conducted_by,
        participants=participants,
        notes=notes,
        submitted_by=submitted_by,
    )
    key = SubmissionKey(facility_id, TaskType.OVERSIGHT_TRAINING, bucket, None)
    return await _guarded_insert(db, key, report)


# ---------------------------------------------------------------------------
# Listing / deletion
# ---------------------------------------------------------------------------

async def list_fire_drills(
    db: AsyncSession,
    facility_id: str,
    year: int | None = None,
    month: int | None = None,
) -> list[FireDrillReport]:
    query = (
        select(FireDrillReport)
        .where(FireDrillReport.facility_id == facility_id)
        .order_by(
            FireDrillReport.report_year.desc(),
            FireDrillReport.report_month.desc(),
            FireDrillReport.shift.asc(),
        )
    )
    if year:
        query = query.where(FireDrillReport.report_year == year)
    if month:
        query = query.where(FireDrillReport.report_month == month)
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_evacuation_drills(
    db: AsyncSession,
    facility_id: str,
    year: int | None = None,
    drill_type: DrillType | None = None,
) -> list[EvacuationDrillReport]:
    query = (
        select(EvacuationDrillReport)
        .where(EvacuationDrillReport.facility_id == facility_id)
        .order_by(
            EvacuationDrillReport.year.desc(),
            EvacuationDrillReport.quarter.desc(),
            EvacuationDrillReport.drill_date.desc(),
        )
    )
    if year:
        query = query.where(EvacuationDrillReport.year == year)
    if drill_type:
        query = query.where(EvacuationDrillReport.drill_type == drill_type)
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_oversight_trainings(
    db: AsyncSession,
    facility_id: str,
    year: int | None = None,
) -> list[OversightTrainingReport]:
    query = (
        select(OversightTrainingReport)
        .where(OversightTrainingReport.facility_id == facility_id)
        .order_by(OversightTrainingReport.year.desc(), OversightTrainingReport.bi_week.desc())
    )
    if year:
        query = query.where(OversightTrainingReport.year == year)
    result = await db.execute(query)
    return list(result.scalars().all())


async def delete_report(db: AsyncSession, model, facility_id: str, report_id: str) -> bool:
    """Delete one report of `model`; False if it does not exist for the facility."""
    result = await db.execute(
        delete(model).where(model.id == report_id, model.facility_id == facility_id)
    )
    await db.flush()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted %s %s for facility %s", model.__tablename__, report_id, facility_id)
    return deleted


# ---------------------------------------------------------------------------
# Dashboards
# ---------------------------------------------------------------------------

def outstanding_to_dict(result) -> dict:
    data = {
        "period": bucket_to_dict(result.bucket),
        "label": period_label(result.bucket),
        "satisfied": result.satisfied,
    }
    if isinstance(result, OutstandingShifts):
        data["missingShifts"] = [s.value for s in result.missing_shifts]
        data["coveredShifts"] = [s.value for s in result.covered_shifts]
    else:
        data["missingCount"] = result.missing_count
    if isinstance(result.bucket, BiWeekBucket):
        data["dateRange"] = bi_week_range_label(result.bucket.year, result.bucket.bi_week)
    return data


async def get_admin_task_status(db: AsyncSession, facility_id: str, today: date) -> dict:
    """Outstanding shifts/reports for every task type in the current period."""
    events = await load_events(db, facility_id)

    tasks = {}
    issue_count = 0
    for task_type in TaskType:
        result = outstanding(requirement_for(task_type), events, facility_id, today)
        if not result.satisfied:
            issue_count += 1
        tasks[task_type.value] = outstanding_to_dict(result)

    return {"facilityId": facility_id, "tasks": tasks, "issueCount": issue_count}


async def get_task_overview(
    db: AsyncSession,
    facility_id: str,
    task_type: TaskType,
    year: int | None,
    today: date,
) -> dict:
    """Per-period history and completion rate for one task type and year.

    Without a year, uses the year of the period containing `today`; for
    bi-weeks that is the ISO week-year.
    """
    requirement = requirement_for(task_type)
    if year is None:
        year = current_period(requirement.bucket_kind, today).year
    events = await load_events(db, facility_id, task_type)
    elapsed = elapsed_buckets(requirement.bucket_kind, year, today)

    history = period_history(requirement, events, facility_id, year, elapsed)
    return {
        "taskType": task_type.value,
        "year": year,
        "elapsedPeriods": elapsed,
        "completedPeriods": sum(1 for h in history if h.satisfied),
        "completionRate": completion_rate(requirement, events, facility_id, year, elapsed),
        "periods": [outstanding_to_dict(h) for h in history],
    }
