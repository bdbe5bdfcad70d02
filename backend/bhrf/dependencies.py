"""Shared FastAPI dependencies."""

from datetime import date, datetime, timezone

from fastapi import Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bhrf.config import get_settings
from bhrf.db.session import get_db
from bhrf.models.facility import Facility


def get_today() -> date:
    """The civil date handlers evaluate compliance against (UTC-pinned).

    Usage in routes:
        @router.get("/something")
        async def handler(today: date = Depends(get_today)):
            ...
    """
    return datetime.now(timezone.utc).date()


def get_warning_window_days() -> int:
    return get_settings().expiration_warning_days


async def get_facility(
    facility_id: str,
    db: AsyncSession = Depends(get_db),
) -> Facility:
    """Resolve the `facility_id` path parameter or answer 404."""
    result = await db.execute(select(Facility).where(Facility.id == facility_id))
    facility = result.scalar_one_or_none()
    if not facility:
        raise HTTPException(status_code=404, detail="Facility not found")
    return facility


__all__ = ["get_db", "get_today", "get_warning_window_days", "get_facility"]
