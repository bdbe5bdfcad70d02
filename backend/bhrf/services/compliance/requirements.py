"""Recurring-task requirements and outstanding-period evaluation.

Each task type has one requirement shape:
  FIRE_DRILL          Monthly-Shift      AM and PM every calendar month
  EVACUATION_DRILL    SemiAnnual-Shift   AM and PM every half (Q1+Q2, Q3+Q4)
  DISASTER_DRILL      Quarterly-Shift    AM and PM every quarter
  OVERSIGHT_TRAINING  BiWeekly-Count     one report every bi-week

Evacuation drill reports are stamped with a quarter; any quarter of a half
counts toward that half, and each shift may be covered by a different quarter.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime
from typing import Hashable

from bhrf.models.enums import BucketKind, RequirementScope, Shift, TaskType

from .errors import BucketKindMismatch, InvalidInputError
from .periods import (
    Bucket,
    QuarterBucket,
    bucket_kind_of,
    buckets_in_year,
    current_period,
    half_bucket_of,
)

SHIFTS = (Shift.AM, Shift.PM)


@dataclass(frozen=True)
class SubmissionKey:
    """The tuple the storage layer keeps unique."""

    facility_id: str
    task_type: TaskType
    bucket: Bucket
    shift: Shift | None = None


@dataclass(frozen=True)
class RecurringTaskEvent:
    facility_id: str
    task_type: TaskType
    bucket: Bucket
    shift: Shift | None = None
    submitted_at: datetime | date | None = None
    id: Hashable | None = None

    @property
    def key(self) -> SubmissionKey:
        return SubmissionKey(self.facility_id, self.task_type, self.bucket, self.shift)


@dataclass(frozen=True)
class RequirementSpec:
    task_type: TaskType
    bucket_kind: BucketKind
    scope: RequirementScope
    retroactive: bool = True


@dataclass(frozen=True)
class OutstandingShifts:
    bucket: Bucket
    missing_shifts: list[Shift]

    @property
    def satisfied(self) -> bool:
        return not self.missing_shifts

    @property
    def covered_shifts(self) -> list[Shift]:
        return [s for s in SHIFTS if s not in self.missing_shifts]


@dataclass(frozen=True)
class OutstandingCount:
    bucket: Bucket
    missing_count: int

    @property
    def satisfied(self) -> bool:
        return self.missing_count == 0


Outstanding = OutstandingShifts | OutstandingCount


REQUIREMENTS: dict[TaskType, RequirementSpec] = {
    TaskType.FIRE_DRILL: RequirementSpec(
        TaskType.FIRE_DRILL, BucketKind.MONTH, RequirementScope.SHIFT
    ),
    TaskType.EVACUATION_DRILL: RequirementSpec(
        TaskType.EVACUATION_DRILL, BucketKind.HALF, RequirementScope.SHIFT
    ),
    TaskType.DISASTER_DRILL: RequirementSpec(
        TaskType.DISASTER_DRILL, BucketKind.QUARTER, RequirementScope.SHIFT
    ),
    TaskType.OVERSIGHT_TRAINING: RequirementSpec(
        TaskType.OVERSIGHT_TRAINING, BucketKind.BI_WEEK, RequirementScope.COUNT
    ),
}

# Kinds an event may be stamped with, per requirement kind
_EVENT_KINDS = {
    BucketKind.MONTH: {BucketKind.MONTH},
    BucketKind.BI_WEEK: {BucketKind.BI_WEEK},
    BucketKind.QUARTER: {BucketKind.QUARTER},
    BucketKind.HALF: {BucketKind.QUARTER, BucketKind.HALF},
}


def requirement_for(task_type: TaskType) -> RequirementSpec:
    return REQUIREMENTS[TaskType(task_type)]


def event_bucket_kind(task_type: TaskType) -> BucketKind:
    """Bucket kind a submitted report of this task type is stamped with."""
    kind = requirement_for(task_type).bucket_kind
    return BucketKind.QUARTER if kind == BucketKind.HALF else kind


def _event_period(requirement: RequirementSpec, event: RecurringTaskEvent) -> Bucket:
    kind = bucket_kind_of(event.bucket)
    if kind not in _EVENT_KINDS[requirement.bucket_kind]:
        raise BucketKindMismatch(
            f"{event.task_type.value} event stamped with {kind.value} bucket, "
            f"requirement expects {requirement.bucket_kind.value}"
        )
    if requirement.bucket_kind == BucketKind.HALF and isinstance(event.bucket, QuarterBucket):
        return half_bucket_of(event.bucket)
    return event.bucket


def _matching_events(
    requirement: RequirementSpec,
    events: Iterable[RecurringTaskEvent],
    facility_id: str,
    bucket: Bucket,
) -> Iterator[RecurringTaskEvent]:
    for event in events:
        if event.facility_id != facility_id or event.task_type != requirement.task_type:
            continue
        if _event_period(requirement, event) == bucket:
            yield event


def outstanding_for_bucket(
    requirement: RequirementSpec,
    events: Iterable[RecurringTaskEvent],
    facility_id: str,
    bucket: Bucket,
) -> Outstanding:
    """Evaluate a requirement for one specific period bucket."""
    if bucket_kind_of(bucket) != requirement.bucket_kind:
        raise BucketKindMismatch(
            f"{requirement.task_type.value} is tracked per {requirement.bucket_kind.value}, "
            f"got a {bucket_kind_of(bucket).value} bucket"
        )

    matched = list(_matching_events(requirement, events, facility_id, bucket))

    if requirement.scope == RequirementScope.SHIFT:
        covered = {e.shift for e in matched}
        return OutstandingShifts(
            bucket=bucket,
            missing_shifts=[s for s in SHIFTS if s not in covered],
        )
    return OutstandingCount(bucket=bucket, missing_count=0 if matched else 1)


def outstanding(
    requirement: RequirementSpec,
    events: Iterable[RecurringTaskEvent],
    facility_id: str,
    today: date,
) -> Outstanding:
    """What is still missing for the period containing `today`."""
    if today is None:
        raise InvalidInputError("today is required")
    bucket = current_period(requirement.bucket_kind, today)
    return outstanding_for_bucket(requirement, events, facility_id, bucket)


def period_history(
    requirement: RequirementSpec,
    events: Iterable[RecurringTaskEvent],
    facility_id: str,
    year: int,
    through_index: int,
) -> list[Outstanding]:
    """Per-bucket status for buckets 1..through_index of `year`."""
    if not requirement.retroactive:
        raise InvalidInputError(
            f"{requirement.task_type.value} is only evaluated for the current period"
        )
    events = list(events)
    return [
        outstanding_for_bucket(requirement, events, facility_id, bucket)
        for bucket in buckets_in_year(requirement.bucket_kind, year, through_index)
    ]


def completion_rate(
    requirement: RequirementSpec,
    events: Iterable[RecurringTaskEvent],
    facility_id: str,
    year: int,
    today_bucket_index: int,
) -> int:
    """Percent of elapsed buckets this year that are fully satisfied.

    Returns 0 when no bucket has elapsed yet.
    """
    if today_bucket_index <= 0:
        return 0
    history = period_history(requirement, events, facility_id, year, today_bucket_index)
    satisfied = sum(1 for result in history if result.satisfied)
    return math.floor(satisfied * 100 / today_bucket_index + 0.5)
