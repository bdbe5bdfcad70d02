"""Document compliance API routes.

Endpoints:
  GET    /api/facilities/{facility_id}/employees/compliance  - Employee rollups
  GET    /api/facilities/{facility_id}/compliance/summary    - Facility health card
  POST   /api/employees/{employee_id}/documents              - Add an employee document
  GET    /api/bhp/{bhp_id}/facilities/compliance             - Facility rollups for a BHP
  GET    /api/bhp/{bhp_id}/credentials/compliance            - BHP credential statuses
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bhrf.db.session import get_db
from bhrf.dependencies import get_facility, get_today, get_warning_window_days
from bhrf.models.facility import Facility
from bhrf.schemas.common import handle_integrity_error
from bhrf.schemas.compliance import CreateEmployeeDocumentRequest
from bhrf.services.compliance.documents import (
    create_employee_document,
    get_bhp_facility_compliance,
    get_credential_compliance,
    get_employee_compliance,
    get_facility_summary,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["compliance"])


@router.get("/facilities/{facility_id}/employees/compliance")
async def employee_compliance(
    include_inactive: bool = Query(default=False, alias="includeInactive"),
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
    window: int = Depends(get_warning_window_days),
):
    """Each employee's document compliance status."""
    data = await get_employee_compliance(
        db, facility.id, today, window, include_inactive=include_inactive
    )
    return {"data": data}


@router.get("/facilities/{facility_id}/compliance/summary")
async def facility_compliance_summary(
    facility: Facility = Depends(get_facility),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
    window: int = Depends(get_warning_window_days),
):
    """Facility health: document issues plus outstanding admin tasks."""
    summary = await get_facility_summary(db, facility.id, today, window)
    summary["facilityName"] = facility.name
    return {"data": summary}


@router.post("/employees/{employee_id}/documents", status_code=201)
async def add_employee_document(
    employee_id: str,
    body: CreateEmployeeDocumentRequest,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
    window: int = Depends(get_warning_window_days),
):
    """Add a document to an employee; its status is classified on write."""
    try:
        doc = await create_employee_document(
            db,
            employee_id,
            name=body.name,
            today=today,
            expires_at=body.expires_at,
            no_expiration=body.no_expiration,
            issued_at=body.issued_at,
            warning_window_days=window,
        )
    except IntegrityError as e:
        await db.rollback()
        raise handle_integrity_error(e)
    if not doc:
        raise HTTPException(status_code=404, detail="Employee not found")

    await db.commit()
    return {
        "data": {
            "id": doc.id,
            "employeeId": doc.employee_id,
            "name": doc.name,
            "issuedAt": doc.issued_at.isoformat() if doc.issued_at else None,
            "expiresAt": doc.expires_at.isoformat() if doc.expires_at else None,
            "noExpiration": doc.no_expiration,
            "status": doc.status.value,
        }
    }


@router.get("/bhp/{bhp_id}/facilities/compliance")
async def bhp_facility_compliance(
    bhp_id: str,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
    window: int = Depends(get_warning_window_days),
):
    """Compliance rollup for every facility a BHP oversees."""
    return {"data": await get_bhp_facility_compliance(db, bhp_id, today, window)}


@router.get("/bhp/{bhp_id}/credentials/compliance")
async def bhp_credential_compliance(
    bhp_id: str,
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
    window: int = Depends(get_warning_window_days),
):
    """A BHP's credentials with expiration status and overall rollup."""
    return {"data": await get_credential_compliance(db, bhp_id, today, window)}
