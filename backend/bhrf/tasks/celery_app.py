"""Celery application: broker config and the beat schedule for compliance jobs."""

from celery import Celery
from celery.schedules import crontab

from bhrf.config import get_settings

_settings = get_settings()

celery = Celery(
    "bhrf",
    broker=_settings.redis_url,
    backend=_settings.redis_url,
)

celery.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    # A status refresh must not be lost if a worker dies mid-run
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    task_soft_time_limit=240,
    task_time_limit=300,
    # Refresh counts are kept for a day for inspection
    result_expires=86400,
    # Beat runs on UTC; "today" for the refresh is the UTC civil date
    timezone="UTC",
    enable_utc=True,
)

# Explicitly import task modules so they register with celery
import bhrf.tasks.compliance_crons  # noqa: F401, E402

celery.conf.beat_schedule = {
    # Shortly after midnight so documents flip to EXPIRED on the right day
    "compliance-status-daily": {
        "task": "compliance.refresh_statuses",
        "schedule": crontab(hour=0, minute=15),
    },
}
