"""Expiration rollups for employee documents, facility documents and credentials."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bhrf.models.enums import ExpirationStatus
from bhrf.models.facility import (
    Credential,
    Employee,
    EmployeeDocument,
    Facility,
    FacilityDocument,
)

from .admin_tasks import get_admin_task_status
from .expiration import (
    DEFAULT_WARNING_WINDOW_DAYS,
    DatedItem,
    aggregate,
    aggregate_many,
    classify,
    status_counts,
)
from .scoring import compliance_health, count_document_issues

logger = logging.getLogger(__name__)


def dated_item(doc) -> DatedItem:
    """Any row with expires_at / no_expiration columns."""
    return DatedItem(id=doc.id, expires_at=doc.expires_at, exempt=doc.no_expiration)


def _doc_to_dict(doc, status: ExpirationStatus) -> dict:
    return {
        "id": doc.id,
        "name": doc.name,
        "expiresAt": doc.expires_at.isoformat() if doc.expires_at else None,
        "noExpiration": doc.no_expiration,
        "status": status.value,
    }


async def _load_employees(
    db: AsyncSession,
    facility_ids: list[str],
    include_inactive: bool = False,
) -> list[Employee]:
    query = (
        select(Employee)
        .options(selectinload(Employee.documents))
        .where(Employee.facility_id.in_(facility_ids))
        .order_by(Employee.last_name.asc())
    )
    if not include_inactive:
        query = query.where(Employee.is_active.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_employee_compliance(
    db: AsyncSession,
    facility_id: str,
    today: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
    include_inactive: bool = False,
) -> dict:
    """Each employee's document rollup plus summary-card counts."""
    employees = await _load_employees(db, [facility_id], include_inactive)
    rollups = aggregate_many(
        {e.id: [dated_item(d) for d in e.documents] for e in employees},
        today,
        warning_window_days,
    )

    return {
        "employees": [
            {
                "id": e.id,
                "firstName": e.first_name,
                "lastName": e.last_name,
                "position": e.position,
                "isActive": e.is_active,
                "documentCount": len(e.documents),
                "complianceStatus": rollups[e.id].value,
            }
            for e in employees
        ],
        "summary": status_counts(rollups.values()),
    }


async def get_bhp_facility_compliance(
    db: AsyncSession,
    bhp_id: str,
    today: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> list[dict]:
    """Facility-level rollup over every active employee's documents."""
    result = await db.execute(
        select(Facility).where(Facility.bhp_id == bhp_id).order_by(Facility.name.asc())
    )
    facilities = list(result.scalars().all())
    if not facilities:
        return []

    employees = await _load_employees(db, [f.id for f in facilities])
    by_facility: dict[str, list[DatedItem]] = {f.id: [] for f in facilities}
    employee_counts: dict[str, int] = {f.id: 0 for f in facilities}
    for e in employees:
        by_facility[e.facility_id].extend(dated_item(d) for d in e.documents)
        employee_counts[e.facility_id] += 1

    return [
        {
            "id": f.id,
            "name": f.name,
            "employeeCount": employee_counts[f.id],
            "complianceStatus": aggregate(by_facility[f.id], today, warning_window_days).value,
        }
        for f in facilities
    ]


async def get_credential_compliance(
    db: AsyncSession,
    bhp_id: str,
    today: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> dict:
    result = await db.execute(
        select(Credential)
        .where(Credential.bhp_id == bhp_id)
        .order_by(Credential.uploaded_at.desc())
    )
    credentials = list(result.scalars().all())
    items = [dated_item(c) for c in credentials]

    return {
        "credentials": [
            _doc_to_dict(c, classify(item, today, warning_window_days))
            for c, item in zip(credentials, items)
        ],
        "complianceStatus": aggregate(items, today, warning_window_days).value,
    }


async def create_employee_document(
    db: AsyncSession,
    employee_id: str,
    *,
    name: str,
    today: date,
    expires_at: date | None = None,
    no_expiration: bool = False,
    issued_at: date | None = None,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> EmployeeDocument | None:
    """Store an employee document with its status classified on write."""
    result = await db.execute(select(Employee.id).where(Employee.id == employee_id))
    if result.scalar_one_or_none() is None:
        return None

    status = classify(
        DatedItem(id=None, expires_at=expires_at, exempt=no_expiration),
        today,
        warning_window_days,
    )
    doc = EmployeeDocument(
        employee_id=employee_id,
        name=name,
        issued_at=issued_at,
        expires_at=None if no_expiration else expires_at,
        no_expiration=no_expiration,
        status=status,
    )
    db.add(doc)
    await db.flush()
    await db.refresh(doc)
    logger.info("Created employee document %s for %s (%s)", doc.id, employee_id, status.value)
    return doc


async def get_facility_summary(
    db: AsyncSession,
    facility_id: str,
    today: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> dict:
    """Facility dashboard: document issues, admin task issues, overall health."""
    result = await db.execute(
        select(FacilityDocument).where(FacilityDocument.facility_id == facility_id)
    )
    documents = list(result.scalars().all())
    doc_statuses = [classify(dated_item(d), today, warning_window_days) for d in documents]

    employee_rollup = await get_employee_compliance(db, facility_id, today, warning_window_days)
    admin_tasks = await get_admin_task_status(db, facility_id, today)

    document_issues = count_document_issues(doc_statuses)
    return {
        "facilityId": facility_id,
        "documents": {
            "total": len(documents),
            "expiringSoon": doc_statuses.count(ExpirationStatus.EXPIRING_SOON),
            "expired": doc_statuses.count(ExpirationStatus.EXPIRED),
            "complianceStatus": aggregate(
                [dated_item(d) for d in documents], today, warning_window_days
            ).value,
        },
        "employees": employee_rollup["summary"],
        "adminTasks": admin_tasks,
        "issueCount": document_issues + admin_tasks["issueCount"],
        "health": compliance_health(document_issues, admin_tasks["issueCount"]).value,
    }
