"""Facility models: Facility, Employee, EmployeeDocument, FacilityDocument, Credential."""

from datetime import date, datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bhrf.db.base import Base
from bhrf.models.enums import ExpirationStatus
from bhrf.models.helpers import generate_cuid


class Facility(Base):
    __tablename__ = "Facility"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    bhp_id: Mapped[str] = mapped_column("bhpId", sa.Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    # Relationships
    employees: Mapped[list["Employee"]] = relationship(back_populates="facility")
    documents: Mapped[list["FacilityDocument"]] = relationship(back_populates="facility")

    __table_args__ = (
        sa.Index("Facility_bhpId_idx", "bhpId"),
    )


class Employee(Base):
    __tablename__ = "Employee"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    facility_id: Mapped[str] = mapped_column(
        "facilityId", sa.Text, sa.ForeignKey("Facility.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    first_name: Mapped[str] = mapped_column("firstName", sa.Text, nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", sa.Text, nullable=False)
    position: Mapped[str | None] = mapped_column(sa.Text)
    is_active: Mapped[bool] = mapped_column("isActive", sa.Boolean, default=True, server_default=sa.true())

    created_at: Mapped[datetime] = mapped_column(
        "createdAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    # Relationships
    facility: Mapped["Facility"] = relationship(back_populates="employees")
    documents: Mapped[list["EmployeeDocument"]] = relationship(back_populates="employee")

    __table_args__ = (
        sa.Index("Employee_facilityId_idx", "facilityId"),
    )


class EmployeeDocument(Base):
    __tablename__ = "EmployeeDocument"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    employee_id: Mapped[str] = mapped_column(
        "employeeId", sa.Text, sa.ForeignKey("Employee.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    issued_at: Mapped[date | None] = mapped_column("issuedAt", sa.Date)
    expires_at: Mapped[date | None] = mapped_column("expiresAt", sa.Date)
    no_expiration: Mapped[bool] = mapped_column(
        "noExpiration", sa.Boolean, default=False, server_default=sa.false()
    )
    # Snapshot of the classifier; refreshed daily by compliance.refresh_statuses
    status: Mapped[ExpirationStatus] = mapped_column(
        sa.Enum(ExpirationStatus, name="ExpirationStatus"), default=ExpirationStatus.VALID
    )

    uploaded_at: Mapped[datetime] = mapped_column(
        "uploadedAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    # Relationships
    employee: Mapped["Employee"] = relationship(back_populates="documents")

    __table_args__ = (
        sa.Index("EmployeeDocument_employeeId_idx", "employeeId"),
        sa.Index("EmployeeDocument_expiresAt_idx", "expiresAt"),
    )


class FacilityDocument(Base):
    __tablename__ = "FacilityDocument"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    facility_id: Mapped[str] = mapped_column(
        "facilityId", sa.Text, sa.ForeignKey("Facility.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    category: Mapped[str | None] = mapped_column(sa.Text)
    expires_at: Mapped[date | None] = mapped_column("expiresAt", sa.Date)
    no_expiration: Mapped[bool] = mapped_column(
        "noExpiration", sa.Boolean, default=False, server_default=sa.false()
    )
    status: Mapped[ExpirationStatus] = mapped_column(
        sa.Enum(ExpirationStatus, name="ExpirationStatus"), default=ExpirationStatus.VALID
    )

    uploaded_at: Mapped[datetime] = mapped_column(
        "uploadedAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    # Relationships
    facility: Mapped["Facility"] = relationship(back_populates="documents")

    __table_args__ = (
        sa.Index("FacilityDocument_facilityId_idx", "facilityId"),
    )


class Credential(Base):
    """A BHP's professional credential (license, certification)."""

    __tablename__ = "Credential"

    id: Mapped[str] = mapped_column(sa.Text, primary_key=True, default=generate_cuid)
    bhp_id: Mapped[str] = mapped_column("bhpId", sa.Text, nullable=False)
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    credential_type: Mapped[str | None] = mapped_column("credentialType", sa.Text)
    expires_at: Mapped[date | None] = mapped_column("expiresAt", sa.Date)
    no_expiration: Mapped[bool] = mapped_column(
        "noExpiration", sa.Boolean, default=False, server_default=sa.false()
    )
    status: Mapped[ExpirationStatus] = mapped_column(
        sa.Enum(ExpirationStatus, name="ExpirationStatus"), default=ExpirationStatus.VALID
    )

    uploaded_at: Mapped[datetime] = mapped_column(
        "uploadedAt", sa.DateTime(timezone=False), server_default=sa.func.now()
    )

    __table_args__ = (
        sa.Index("Credential_bhpId_idx", "bhpId"),
    )
