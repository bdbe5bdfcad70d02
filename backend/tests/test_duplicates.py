from datetime import date

from bhrf.models.enums import Quarter, Shift, TaskType
from bhrf.services.compliance.duplicates import check_duplicate, duplicate_message
from bhrf.services.compliance.periods import (
    BiWeekBucket,
    QuarterBucket,
    bi_week_bucket_of,
    month_bucket_of,
)
from bhrf.services.compliance.requirements import RecurringTaskEvent, SubmissionKey


def _event(key: SubmissionKey, event_id: str) -> RecurringTaskEvent:
    return RecurringTaskEvent(
        facility_id=key.facility_id,
        task_type=key.task_type,
        bucket=key.bucket,
        shift=key.shift,
        submitted_at=date(2025, 3, 5),
        id=event_id,
    )


def test_second_submission_for_same_period_and_shift_is_duplicate():
    key = SubmissionKey("fac-1", TaskType.FIRE_DRILL, month_bucket_of(date(2025, 3, 5)), Shift.PM)
    existing: list[RecurringTaskEvent] = []

    first = check_duplicate(key, existing)
    assert first.ok
    existing.append(_event(key, "r1"))

    # Different day, same month: a fresh but value-equal bucket
    again = SubmissionKey("fac-1", TaskType.FIRE_DRILL, month_bucket_of(date(2025, 3, 28)), Shift.PM)
    second = check_duplicate(again, existing)
    assert not second.ok
    assert second.duplicate.id == "r1"


def test_other_shift_facility_or_task_is_not_duplicate():
    bucket = QuarterBucket(2025, Quarter.Q1)
    existing = [_event(SubmissionKey("fac-1", TaskType.DISASTER_DRILL, bucket, Shift.AM), "r1")]

    assert check_duplicate(SubmissionKey("fac-1", TaskType.DISASTER_DRILL, bucket, Shift.PM), existing).ok
    assert check_duplicate(SubmissionKey("fac-2", TaskType.DISASTER_DRILL, bucket, Shift.AM), existing).ok
    assert check_duplicate(SubmissionKey("fac-1", TaskType.EVACUATION_DRILL, bucket, Shift.AM), existing).ok
    assert check_duplicate(
        SubmissionKey("fac-1", TaskType.DISASTER_DRILL, QuarterBucket(2025, Quarter.Q2), Shift.AM),
        existing,
    ).ok


def test_oversight_training_has_no_shift():
    key = SubmissionKey("fac-1", TaskType.OVERSIGHT_TRAINING, bi_week_bucket_of(date(2025, 1, 20)))
    existing = [_event(key, "t1")]
    assert check_duplicate(
        SubmissionKey("fac-1", TaskType.OVERSIGHT_TRAINING, BiWeekBucket(2025, 2)), existing
    ).duplicate.id == "t1"


def test_duplicate_messages_name_period_and_shift():
    assert duplicate_message(
        SubmissionKey("f", TaskType.FIRE_DRILL, month_bucket_of(date(2025, 3, 1)), Shift.PM)
    ) == "A PM shift fire drill report already exists for March 2025"
    assert duplicate_message(
        SubmissionKey("f", TaskType.DISASTER_DRILL, QuarterBucket(2025, Quarter.Q1), Shift.AM)
    ) == "A disaster drill report for AM shift already exists for Q1 (Jan-Mar) 2025"
    assert duplicate_message(
        SubmissionKey("f", TaskType.OVERSIGHT_TRAINING, BiWeekBucket(2025, 2))
    ) == "An oversight training report already exists for bi-week 2 of 2025"


def test_duplicate_message_article_follows_the_next_word():
    q2 = QuarterBucket(2025, Quarter.Q2)
    assert duplicate_message(
        SubmissionKey("f", TaskType.EVACUATION_DRILL, q2, Shift.AM)
    ) == "An evacuation drill report for AM shift already exists for Q2 (Apr-Jun) 2025"
    assert duplicate_message(
        SubmissionKey("f", TaskType.FIRE_DRILL, month_bucket_of(date(2025, 3, 1)), Shift.AM)
    ) == "An AM shift fire drill report already exists for March 2025"
