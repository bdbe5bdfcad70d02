"""Duplicate submission guard.

A facility may submit one report per (task type, period, shift). This is the
friendly pre-flight check run before insert; the unique constraint on each
report table is what actually enforces it.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from bhrf.models.enums import TaskType

from .periods import period_label
from .requirements import RecurringTaskEvent, SubmissionKey

_TASK_NOUNS = {
    TaskType.FIRE_DRILL: "fire drill",
    TaskType.EVACUATION_DRILL: "evacuation drill",
    TaskType.DISASTER_DRILL: "disaster drill",
    TaskType.OVERSIGHT_TRAINING: "oversight training",
}


@dataclass(frozen=True)
class DuplicateCheck:
    duplicate: RecurringTaskEvent | None = None

    @property
    def ok(self) -> bool:
        return self.duplicate is None


def check_duplicate(
    candidate: SubmissionKey,
    existing: Iterable[RecurringTaskEvent],
) -> DuplicateCheck:
    """Return the first existing event with the same key, if any."""
    for event in existing:
        if event.key == candidate:
            return DuplicateCheck(duplicate=event)
    return DuplicateCheck()


def _with_article(phrase: str) -> str:
    article = "An" if phrase[:1].upper() in "AEIOU" else "A"
    return f"{article} {phrase}"


def duplicate_message(key: SubmissionKey) -> str:
    """Human-readable rejection naming the period and shift."""
    noun = _TASK_NOUNS[key.task_type]
    period = period_label(key.bucket)
    if key.task_type == TaskType.FIRE_DRILL:
        subject = f"{key.shift.value} shift {noun} report"
    elif key.shift is None:
        subject = f"{noun} report"
    else:
        subject = f"{noun} report for {key.shift.value} shift"
    return f"{_with_article(subject)} already exists for {period}"
