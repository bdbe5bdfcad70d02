"""Recurring admin-task reports: FireDrillReport, EvacuationDrillReport,
OversightTrainingReport.

Each table carries the unique constraint on (facility, task, period, shift)
that backs the duplicate submission guard.
"""

from datetime import date, datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from bhrf.db.base import Base
from bhrf.models.enums import DrillType, FireDrillType, Quarter, Shift
from bhrf.models.helpers import generate_cuid


class FireDrillReport(Base):
    __tablename__ = "FireDrillReport"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    facility_id: Mapped[str] = mapped_column(
        "facilityId", sa.Text, sa.ForeignKey("Facility.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    report_year: Mapped[int] = mapped_column("reportYear", sa.Integer, nullable=False)
    report_month: Mapped[int] = mapped_column("reportMonth", sa.Integer, nullable=False)
    shift: Mapped[Shift] = mapped_column(sa.Enum(Shift, name="Shift"), nullable=False)
    drill_date: Mapped[date] = mapped_column("drillDate", sa.Date, nullable=False)
    drill_time: Mapped[str | None] = mapped_column("drillTime", sa.Text)
    drill_type: Mapped[FireDrillType] = mapped_column(
        "drillType", sa.Enum(FireDrillType, name="FireDrillType"), nullable=False
    )
    conducted_by: Mapped[str] = mapped_column("conductedBy", sa.Text, nullable=False)
    # Checklist, timings, signatures: stored as submitted
    details: Mapped[dict | None] = mapped_column(sa.JSON)
    submitted_by: Mapped[str | None] = mapped_column("submittedBy", sa.Text)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    __table_args__ = (
        sa.UniqueConstraint(
            "facilityId", "reportMonth", "reportYear", "shift",
            name="FireDrillReport_facilityId_reportMonth_reportYear_shift_key",
        ),
    )


class EvacuationDrillReport(Base):
    """Evacuation (semiannual) and disaster (quarterly) drills share one table."""

    __tablename__ = "EvacuationDrillReport"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    facility_id: Mapped[str] = mapped_column(
        "facilityId", sa.Text, sa.ForeignKey("Facility.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    drill_type: Mapped[DrillType] = mapped_column(
        "drillType", sa.Enum(DrillType, name="DrillType"), nullable=False
    )
    year: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    quarter: Mapped[Quarter] = mapped_column(sa.Enum(Quarter, name="Quarter"), nullable=False)
    shift: Mapped[Shift] = mapped_column(sa.Enum(Shift, name="Shift"), nullable=False)
    drill_date: Mapped[date] = mapped_column("drillDate", sa.Date, nullable=False)
    drill_time: Mapped[str | None] = mapped_column("drillTime", sa.Text)
    disaster_drill_type: Mapped[str | None] = mapped_column("disasterDrillType", sa.Text)
    conducted_by: Mapped[str | None] = mapped_column("conductedBy", sa.Text)
    details: Mapped[dict | None] = mapped_column(sa.JSON)
    submitted_by: Mapped[str | None] = mapped_column("submittedBy", sa.Text)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    __table_args__ = (
        sa.UniqueConstraint(
            "facilityId", "drillType", "quarter", "year", "shift",
            name="EvacuationDrillReport_facilityId_drillType_quarter_year_shift_key",
        ),
    )


class OversightTrainingReport(Base):
    __tablename__ = "OversightTrainingReport"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    facility_id: Mapped[str] = mapped_column(
        "facilityId", sa.Text, sa.ForeignKey("Facility.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    # ISO week-year, which differs from the calendar year around New Year
    year: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    bi_week: Mapped[int] = mapped_column("biWeek", sa.Integer, nullable=False)
    training_date: Mapped[date] = mapped_column("trainingDate", sa.Date, nullable=False)
    conducted_by: Mapped[str] = mapped_column("conductedBy", sa.Text, nullable=False)
    participants: Mapped[list | None] = mapped_column(sa.JSON)
    notes: Mapped[str | None] = mapped_column(sa.Text)
    submitted_by: Mapped[str | None] = mapped_column("submittedBy", sa.Text)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    __table_args__ = (
        sa.UniqueConstraint(
            "facilityId", "biWeek", "year",
            name="OversightTrainingReport_facilityId_biWeek_year_key",
        ),
    )
