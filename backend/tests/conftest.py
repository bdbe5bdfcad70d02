"""Shared fixtures: a temporary SQLite database and an API client bound to it."""

import os

# Settings are read at import time by bhrf.db.session
os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest-bhrf.db")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

import bhrf.models  # noqa: E402,F401
from bhrf.db.base import Base  # noqa: E402
from bhrf.db.session import get_db  # noqa: E402
from bhrf.dependencies import get_today  # noqa: E402
from bhrf.main import app  # noqa: E402
from bhrf.models.facility import (  # noqa: E402
    Credential,
    Employee,
    EmployeeDocument,
    Facility,
    FacilityDocument,
)

TODAY = date(2025, 3, 20)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "bhrf-test.db"


@pytest.fixture
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(sync_engine):
    with Session(sync_engine, expire_on_commit=False) as s:
        yield s


@pytest.fixture
def seeded(session):
    """One BHP with two facilities; the first has staff and documents."""
    north = Facility(id="fac-north", name="North House", bhp_id="bhp-1")
    south = Facility(id="fac-south", name="South House", bhp_id="bhp-1")
    session.add_all([north, south])
    session.flush()

    ana = Employee(id="emp-ana", facility_id=north.id, first_name="Ana", last_name="Alvarez")
    ben = Employee(id="emp-ben", facility_id=north.id, first_name="Ben", last_name="Brooks")
    cy = Employee(id="emp-cy", facility_id=north.id, first_name="Cy", last_name="Chen")
    dee = Employee(id="emp-dee", facility_id=south.id, first_name="Dee", last_name="Diaz")
    session.add_all([ana, ben, cy, dee])
    session.flush()

    session.add_all([
        # Ana: CPR card expiring within 30 days
        EmployeeDocument(employee_id=ana.id, name="CPR", expires_at=date(2025, 3, 25)),
        EmployeeDocument(employee_id=ana.id, name="TB Test", expires_at=date(2025, 9, 1)),
        # Ben: expired fingerprint card, diploma never expires
        EmployeeDocument(employee_id=ben.id, name="Fingerprint Card", expires_at=date(2025, 3, 1)),
        EmployeeDocument(employee_id=ben.id, name="Diploma", no_expiration=True),
        # Cy: nothing on file. Dee works at the south house
        EmployeeDocument(employee_id=dee.id, name="CPR", expires_at=date(2026, 1, 1)),
        FacilityDocument(facility_id=north.id, name="Fire Inspection", expires_at=date(2025, 4, 1)),
        FacilityDocument(facility_id=north.id, name="License", expires_at=date(2026, 6, 30)),
        Credential(bhp_id="bhp-1", name="LPC License", expires_at=date(2025, 2, 28)),
        Credential(bhp_id="bhp-1", name="CPR", expires_at=date(2025, 12, 31)),
    ])
    session.commit()
    return {"north": north, "south": south}


@pytest.fixture
def client(db_path, sync_engine):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _get_test_db():
        async with factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides.clear()
