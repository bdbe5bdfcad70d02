"""Compliance Celery cron tasks.

Daily: re-classify the stored status of every expirable employee document,
facility document and credential. The status column is written when a row
is created and goes stale as dates pass.
"""

import logging
from datetime import date, datetime, timezone

from celery import shared_task
from sqlalchemy import select
from sqlalchemy.orm import Session

from bhrf.config import get_settings
from bhrf.db.session import sync_session_factory
from bhrf.models.enums import ExpirationStatus
from bhrf.models.facility import Credential, EmployeeDocument, FacilityDocument
from bhrf.services.compliance.expiration import classify, status_escalated
from bhrf.services.compliance.documents import dated_item

logger = logging.getLogger(__name__)

_EXPIRABLE_MODELS = (EmployeeDocument, FacilityDocument, Credential)


@shared_task(name="compliance.refresh_statuses", bind=True, max_retries=2)
def refresh_statuses_cron(self) -> dict:
    """Daily: refresh stored expiration statuses."""
    try:
        today = datetime.now(timezone.utc).date()
        window = get_settings().expiration_warning_days
        with sync_session_factory() as session:
            changes = refresh_stored_statuses(session, today, window)
            session.commit()
        return changes
    except Exception as exc:
        logger.exception("Compliance status refresh failed")
        raise self.retry(exc=exc, countdown=300)


def refresh_stored_statuses(session: Session, today: date, warning_window_days: int) -> dict:
    """Re-classify every row that can expire; the caller commits."""
    changes = {"checked": 0, "changed": 0, "escalated": 0, "expired": 0}

    for model in _EXPIRABLE_MODELS:
        rows = session.execute(
            select(model).where(model.no_expiration.is_(False), model.expires_at.is_not(None))
        ).scalars().all()

        for row in rows:
            changes["checked"] += 1
            new_status = classify(dated_item(row), today, warning_window_days)
            if new_status == row.status:
                continue

            if status_escalated(row.status, new_status):
                changes["escalated"] += 1
            if new_status == ExpirationStatus.EXPIRED:
                changes["expired"] += 1
            row.status = new_status
            changes["changed"] += 1

    if changes["changed"]:
        session.flush()
        logger.info(
            "Refreshed expiration statuses: %d checked, %d changed, %d escalated, %d expired",
            changes["checked"], changes["changed"], changes["escalated"], changes["expired"],
        )
    return changes
