"""BHRF compliance FastAPI application."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from bhrf.config import get_settings
from bhrf.db.session import engine
from bhrf.routers import admin_tasks, compliance, health

_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown lifecycle."""
    # Startup: verify DB connection
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    yield
    # Shutdown: dispose engine
    await engine.dispose()


app = FastAPI(
    title="BHRF Compliance API",
    description="Drill, training and credential compliance for behavioral-health residential facilities",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS - allow frontend origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        _settings.app_url,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers - all prefixed with /api
app.include_router(health.router, prefix="/api")
app.include_router(admin_tasks.router, prefix="/api")
app.include_router(compliance.router, prefix="/api")
