"""Shared schema helpers and standard error handling."""

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError


def handle_integrity_error(exc: IntegrityError) -> HTTPException:
    """Map SQLAlchemy IntegrityError to an HTTP error.

      unique constraint  → 409
      foreign key        → 404 (parent row is gone)
      anything else      → 500

    Report submissions do not come through here: their unique constraints
    are turned into the duplicate-period message by the admin-task service.
    """
    msg = (str(exc.orig) if exc.orig else str(exc)).lower()
    if "unique" in msg or "duplicate" in msg:
        return HTTPException(status_code=409, detail="Record already exists")
    if "foreign key" in msg:
        return HTTPException(status_code=404, detail="Related record not found")
    return HTTPException(status_code=500, detail="Database error")
