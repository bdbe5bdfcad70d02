"""Enum types shared by the ORM models, the compliance engine and the API."""

import enum


class Shift(str, enum.Enum):
    AM = "AM"
    PM = "PM"


class Quarter(str, enum.Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


class Half(str, enum.Enum):
    H1 = "H1"
    H2 = "H2"


class BucketKind(str, enum.Enum):
    MONTH = "MONTH"
    BI_WEEK = "BI_WEEK"
    QUARTER = "QUARTER"
    HALF = "HALF"


class TaskType(str, enum.Enum):
    FIRE_DRILL = "FIRE_DRILL"
    EVACUATION_DRILL = "EVACUATION_DRILL"
    DISASTER_DRILL = "DISASTER_DRILL"
    OVERSIGHT_TRAINING = "OVERSIGHT_TRAINING"


class RequirementScope(str, enum.Enum):
    SHIFT = "SHIFT"  # one submission per shift per period
    COUNT = "COUNT"  # one submission per period, no shift


class DrillType(str, enum.Enum):
    EVACUATION = "EVACUATION"
    DISASTER = "DISASTER"


class FireDrillType(str, enum.Enum):
    ANNOUNCED = "ANNOUNCED"
    UNANNOUNCED = "UNANNOUNCED"


class ExpirationStatus(str, enum.Enum):
    VALID = "VALID"
    EXPIRING_SOON = "EXPIRING_SOON"
    EXPIRED = "EXPIRED"
    NO_ITEMS = "NO_ITEMS"  # aggregate only


class ComplianceHealth(str, enum.Enum):
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"
