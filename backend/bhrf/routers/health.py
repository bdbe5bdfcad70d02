"""Health check endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from bhrf.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> dict:
    """Health check - verifies DB connectivity."""
    result = await db.execute(text("SELECT 1"))
    row = result.scalar()
    return {
        "status": "healthy",
        "database": "connected" if row == 1 else "error",
        "service": "bhrf-api",
        "version": "0.1.0",
    }
