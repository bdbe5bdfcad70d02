"""Pydantic schemas for admin-task report requests."""

from datetime import date

from pydantic import BaseModel, Field

from bhrf.models.enums import DrillType, FireDrillType, Shift


# ---------------------------------------------------------------------------
# Fire drills
# ---------------------------------------------------------------------------

class CreateFireDrillRequest(BaseModel):
    drill_date: date = Field(alias="drillDate")
    drill_time: str | None = Field(default=None, alias="drillTime")
    shift: Shift
    drill_type: FireDrillType = Field(alias="drillType")
    conducted_by: str = Field(alias="conductedBy", min_length=1)
    location: str | None = None
    safety_checklist: dict | None = Field(default=None, alias="safetyChecklist")
    observations: str | None = None
    corrective_actions: str | None = Field(default=None, alias="correctiveActions")
    submitted_by: str | None = Field(default=None, alias="submittedBy")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Evacuation / disaster drills
# ---------------------------------------------------------------------------

class CreateEvacuationDrillRequest(BaseModel):
    drill_type: DrillType = Field(alias="drillType")
    drill_date: date = Field(alias="drillDate")
    drill_time: str | None = Field(default=None, alias="drillTime")
    shift: Shift
    disaster_drill_type: str | None = Field(default=None, alias="disasterDrillType")
    conducted_by: str | None = Field(default=None, alias="conductedBy")
    total_length_minutes: int | None = Field(default=None, alias="totalLengthMinutes", ge=0)
    observations: str | None = None
    submitted_by: str | None = Field(default=None, alias="submittedBy")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Oversight training
# ---------------------------------------------------------------------------

class StaffParticipant(BaseModel):
    name: str = Field(min_length=1)
    position: str | None = None


class CreateOversightTrainingRequest(BaseModel):
    training_date: date = Field(alias="trainingDate")
    conducted_by: str = Field(alias="conductedBy", min_length=1)
    staff_participants: list[StaffParticipant] = Field(alias="staffParticipants", min_length=1)
    notes: str | None = None
    submitted_by: str | None = Field(default=None, alias="submittedBy")

    model_config = {"populate_by_name": True}
