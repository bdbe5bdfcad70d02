"""Admin-task report API routes.

All routes: /api/facilities/{facility_id}/...

Endpoints:
  GET    /fire-drills                          - List fire drill reports
  POST   /fire-drills                          - Submit a fire drill report
  DELETE /fire-drills/{report_id}              - Delete a fire drill report

  GET    /evacuation-drills                    - List evacuation/disaster drill reports
  POST   /evacuation-drills                    - Submit an evacuation/disaster drill report
  DELETE /evacuation-drills/{report_id}        - Delete an evacuation/disaster drill report

  GET    /oversight-training                   - List oversight training reports
  POST   /oversight-training                   - Submit an oversight training report
  DELETE /oversight-training/{report_id}       - Delete an oversight training report

  GET    /admin-tasks/status                   - Outstanding shifts for the current periods
  GET    /admin-tasks/{task_type}/overview     - Yearly history and completion rate
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bhrf.db.session import get_db
from bhrf.dependencies import get_facility, get_today
from bhrf.models.admin_task import (
    EvacuationDrillReport,
    FireDrillReport,
    OversightTrainingReport,
)
from bhrf.models.enums import DrillType, TaskType
from bhrf.models.facility import Facility
from bhrf.schemas.admin_tasks import (
    CreateEvacuationDrillRequest,
    CreateFireDrillRequest,
    CreateOversightTrainingRequest,
)
from bhrf.services.compliance.admin_tasks import (
    delete_report,
    get_admin_task_status,
    get_task_overview,
    list_evacuation_drills,
    list_fire_drills,
    list_oversight_trainings,
    submit_evacuation_drill,
    submit_fire_drill,
    submit_oversight_training,
)
from bhrf.services.compliance.errors import DuplicateSubmissionError
from bhrf.services.compliance.periods import bi_week_range_label

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin-tasks"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fire_drill_to_dict(r: FireDrillReport) -> dict:
    return {
        "id": r.id,
        "facilityId": r.facility_id,
        "reportYear": r.report_year,
        "reportMonth": r.report_month,
        "shift": r.shift.value,
        "drillDate": r.drill_date.isoformat(),
        "drillTime": r.drill_time,
        "drillType": r.drill_type.value,
        "conductedBy": r.conducted_by,
        "details": r.details,
        "submittedBy": r.submitted_by,
        "createdAt": r.created_at.isoformat() if r.created_at else None,
    }


def _evacuation_drill_to_dict(r: EvacuationDrillReport) -> dict:
    return {
        "id": r.id,
        "facilityId": r.facility_id,
        "drillType": r.drill_type.value,
        "year": r.year,
        "quarter": r.quarter.value,
        "shift": r.shift.value,
        "drillDate": r.drill_date.isoformat(),
        "drillTime": r.drill_time,
        "disasterDrillType": r.disaster_drill_type,
        "conductedBy": r.conducted_by,
        "details": r.details,
        "submittedBy": r.submitted_by,
        "createdAt": r.created_at.isoformat() if r.created_at else None,
    }


def _oversight_training_to_dict(r: OversightTrainingReport) -> dict:
    return {
        "id": r.id,
        "facilityId": r.facility_id,
        "year": r.year,
        "biWeek": r.bi_week,
        "dateRange": bi_week_range_label(r.year, r.bi_week),
        "trainingDate": r.training_date.isoformat(),
        "conductedBy": r.conducted_by,
        "participants": r.participants,
        "notes": r.notes,
        "submittedBy": r.submitted_by,
        "createdAt": r.created_at.isoformat() if r.created_at else None,
    }


async def _delete(db: AsyncSession, model, facility_id: str, report_id: str) -> dict:
    deleted = await delete_report(db, model, facility_id, report_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Report not found")
    await db.commit()
    return {"data": {"id": report_id, "deleted": True}}


# ---------------------------------------------------------------------------
# Fire drills
# ---------------------------------------------------------------------------

@router.get("/facilities/{facility_id}/fire-drills")
async def list_fire_drill_reports(
    year: int | None = Query(default=None),
    month: int | None = Query(default=None, ge=1, le=12),
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """List fire drill reports for a facility."""
    reports = await list_fire_drills(db, facility.id, year=year, month=month)
    return {"data": [_fire_drill_to_dict(r) for r in reports]}


@router.post("/facilities/{facility_id}/fire-drills", status_code=201)
async def create_fire_drill_report(
    body: CreateFireDrillRequest,
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """Submit a fire drill report (one per month per shift)."""
    details = body.model_dump(
        by_alias=True,
        include={"location", "safety_checklist", "observations", "corrective_actions"},
        exclude_none=True,
    )
    try:
        report = await submit_fire_drill(
            db,
            facility.id,
            drill_date=body.drill_date,
            shift=body.shift,
            drill_type=body.drill_type,
            conducted_by=body.conducted_by,
            drill_time=body.drill_time,
            details=details or None,
            submitted_by=body.submitted_by,
        )
    except DuplicateSubmissionError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        await db.rollback()
        logger.exception("Create fire drill report failed")
        raise HTTPException(status_code=500, detail="Failed to create fire drill report")

    await db.commit()
    return {"data": _fire_drill_to_dict(report)}


@router.delete("/facilities/{facility_id}/fire-drills/{report_id}")
async def delete_fire_drill_report(
    report_id: str,
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """Delete a fire drill report."""
    return await _delete(db, FireDrillReport, facility.id, report_id)


# ---------------------------------------------------------------------------
# Evacuation / disaster drills
# ---------------------------------------------------------------------------

@router.get("/facilities/{facility_id}/evacuation-drills")
async def list_evacuation_drill_reports(
    year: int | None = Query(default=None),
    drill_type: str | None = Query(default=None, alias="drillType"),
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """List evacuation and disaster drill reports for a facility."""
    dt = None
    if drill_type:
        try:
            dt = DrillType(drill_type)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid drillType: {drill_type}")

    reports = await list_evacuation_drills(db, facility.id, year=year, drill_type=dt)
    return {"data": [_evacuation_drill_to_dict(r) for r in reports]}


@router.post("/facilities/{facility_id}/evacuation-drills", status_code=201)
async def create_evacuation_drill_report(
    body: CreateEvacuationDrillRequest,
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """Submit an evacuation or disaster drill report (one per quarter per shift)."""
    details = body.model_dump(
        by_alias=True,
        include={"total_length_minutes", "observations"},
        exclude_none=True,
    )
    try:
        report = await submit_evacuation_drill(
            db,
            facility.id,
            drill_type=body.drill_type,
            drill_date=body.drill_date,
            shift=body.shift,
            drill_time=body.drill_time,
            disaster_drill_type=body.disaster_drill_type,
            conducted_by=body.conducted_by,
            details=details or None,
            submitted_by=body.submitted_by,
        )
    except DuplicateSubmissionError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        await db.rollback()
        logger.exception("Create evacuation drill report failed")
        raise HTTPException(status_code=500, detail="Failed to create evacuation drill report")

    await db.commit()
    return {"data": _evacuation_drill_to_dict(report)}


@router.delete("/facilities/{facility_id}/evacuation-drills/{report_id}")
async def delete_evacuation_drill_report(
    report_id: str,
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """Delete an evacuation or disaster drill report."""
    return await _delete(db, EvacuationDrillReport, facility.id, report_id)


# ---------------------------------------------------------------------------
# Oversight training
# ---------------------------------------------------------------------------

@router.get("/facilities/{facility_id}/oversight-training")
async def list_oversight_training_reports(
    year: int | None = Query(default=None),
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """List oversight training reports for a facility."""
    reports = await list_oversight_trainings(db, facility.id, year=year)
    return {"data": [_oversight_training_to_dict(r) for r in reports]}


@router.post("/facilities/{facility_id}/oversight-training", status_code=201)
async def create_oversight_training_report(
    body: CreateOversightTrainingRequest,
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """Submit an oversight training report (one per bi-week)."""
    try:
        report = await submit_oversight_training(
            db,
            facility.id,
            training_date=body.training_date,
            conducted_by=body.conducted_by,
            participants=[p.model_dump() for p in body.staff_participants],
            notes=body.notes,
            submitted_by=body.submitted_by,
        )
    except DuplicateSubmissionError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        await db.rollback()
        logger.exception("Create oversight training report failed")
        raise HTTPException(status_code=500, detail="Failed to create oversight training report")

    await db.commit()
    return {"data": _oversight_training_to_dict(report)}


@router.delete("/facilities/{facility_id}/oversight-training/{report_id}")
async def delete_oversight_training_report(
    report_id: str,
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
):
    """Delete an oversight training report."""
    return await _delete(db, OversightTrainingReport, facility.id, report_id)


# ---------------------------------------------------------------------------
# Status / overview
# ---------------------------------------------------------------------------

@router.get("/facilities/{facility_id}/admin-tasks/status")
async def admin_task_status(
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """What each recurring task still needs for the current period."""
    return {"data": await get_admin_task_status(db, facility.id, today)}


@router.get("/facilities/{facility_id}/admin-tasks/{task_type}/overview")
async def admin_task_overview(
    task_type: str,
    year: int | None = Query(default=None),
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """Per-period history and completion rate for one task type."""
    try:
        tt = TaskType(task_type)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid task type: {task_type}")

    overview = await get_task_overview(db, facility.id, tt, year, today)
    return {"data": overview}
