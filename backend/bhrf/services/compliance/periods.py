"""Regulatory period buckets.

Maps a civil calendar date onto the periods each recurring task is due in:
  MONTH:    calendar month                       (fire drills)
  BI_WEEK:  pair of ISO weeks, ceil(week / 2)    (oversight training)
  QUARTER:  calendar quarter                     (disaster drills)
  HALF:     Q1+Q2 / Q3+Q4                        (evacuation drills)

Month, quarter and half follow the calendar month. Only the bi-week uses ISO
week semantics, so its year is the ISO week-year and a 53-week year has a
bi-week 27. That bucket is kept as is, not folded into bi-week 26.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from bhrf.models.enums import BucketKind, Half, Quarter

from .errors import InvalidInputError

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

QUARTER_NAMES = {
    Quarter.Q1: "Q1 (Jan-Mar)",
    Quarter.Q2: "Q2 (Apr-Jun)",
    Quarter.Q3: "Q3 (Jul-Sep)",
    Quarter.Q4: "Q4 (Oct-Dec)",
}

HALF_NAMES = {
    Half.H1: "H1 (Q1-Q2)",
    Half.H2: "H2 (Q3-Q4)",
}

_QUARTERS = [Quarter.Q1, Quarter.Q2, Quarter.Q3, Quarter.Q4]


# ---------------------------------------------------------------------------
# Buckets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MonthBucket:
    year: int
    month: int


@dataclass(frozen=True)
class BiWeekBucket:
    year: int
    bi_week: int


@dataclass(frozen=True)
class QuarterBucket:
    year: int
    quarter: Quarter


@dataclass(frozen=True)
class HalfBucket:
    year: int
    half: Half


Bucket = MonthBucket | BiWeekBucket | QuarterBucket | HalfBucket

_BUCKET_KINDS = {
    MonthBucket: BucketKind.MONTH,
    BiWeekBucket: BucketKind.BI_WEEK,
    QuarterBucket: BucketKind.QUARTER,
    HalfBucket: BucketKind.HALF,
}


def _as_date(d) -> date:
    if d is None:
        raise InvalidInputError("A calendar date is required")
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    raise InvalidInputError(f"Expected a date, got {type(d).__name__}")


# ---------------------------------------------------------------------------
# Date -> bucket
# ---------------------------------------------------------------------------

def month_bucket_of(d: date) -> MonthBucket:
    d = _as_date(d)
    return MonthBucket(year=d.year, month=d.month)


def quarter_bucket_of(d: date) -> QuarterBucket:
    d = _as_date(d)
    return QuarterBucket(year=d.year, quarter=_QUARTERS[(d.month - 1) // 3])


def half_bucket_of(quarter: QuarterBucket) -> HalfBucket:
    """Q1/Q2 -> H1, Q3/Q4 -> H2 of the same year."""
    if not isinstance(quarter, QuarterBucket):
        raise InvalidInputError("half_bucket_of expects a QuarterBucket")
    half = Half.H1 if quarter.quarter in (Quarter.Q1, Quarter.Q2) else Half.H2
    return HalfBucket(year=quarter.year, half=half)


def iso_week_of(d: date) -> tuple[int, int]:
    """Return (iso_year, iso_week) using the Thursday-anchored ISO 8601 rule."""
    iso = _as_date(d).isocalendar()
    return iso[0], iso[1]


def bi_week_bucket_of(d: date) -> BiWeekBucket:
    iso_year, week = iso_week_of(d)
    return BiWeekBucket(year=iso_year, bi_week=max(1, math.ceil(week / 2)))


def bucket_of(kind: BucketKind, d: date) -> Bucket:
    if kind == BucketKind.MONTH:
        return month_bucket_of(d)
    if kind == BucketKind.BI_WEEK:
        return bi_week_bucket_of(d)
    if kind == BucketKind.QUARTER:
        return quarter_bucket_of(d)
    if kind == BucketKind.HALF:
        return half_bucket_of(quarter_bucket_of(d))
    raise InvalidInputError(f"Unknown bucket kind: {kind}")


def current_period(kind: BucketKind, today: date) -> Bucket:
    """The bucket of `kind` that is active on `today`."""
    return bucket_of(kind, today)


def bucket_kind_of(bucket: Bucket) -> BucketKind:
    try:
        return _BUCKET_KINDS[type(bucket)]
    except KeyError:
        raise InvalidInputError(f"Not a period bucket: {bucket!r}") from None


def bucket_index(bucket: Bucket) -> int:
    """1-based position of the bucket within its year."""
    if isinstance(bucket, MonthBucket):
        return bucket.month
    if isinstance(bucket, BiWeekBucket):
        return bucket.bi_week
    if isinstance(bucket, QuarterBucket):
        return _QUARTERS.index(bucket.quarter) + 1
    if isinstance(bucket, HalfBucket):
        return 1 if bucket.half == Half.H1 else 2
    raise InvalidInputError(f"Not a period bucket: {bucket!r}")


def elapsed_buckets(kind: BucketKind, year: int, today: date) -> int:
    """Number of buckets of `year` that have started by `today`.

    A past year counts all of its buckets, a future year none.
    """
    current = current_period(kind, today)
    if year > current.year:
        return 0
    if year == current.year:
        return bucket_index(current)
    # Dec 28 always falls in the last ISO week of its year
    return bucket_index(bucket_of(kind, date(year, 12, 28)))


def buckets_in_year(kind: BucketKind, year: int, last_index: int) -> list[Bucket]:
    """All buckets of `kind` in `year` with index 1..last_index."""
    if kind == BucketKind.MONTH:
        return [MonthBucket(year, m) for m in range(1, last_index + 1)]
    if kind == BucketKind.BI_WEEK:
        return [BiWeekBucket(year, b) for b in range(1, last_index + 1)]
    if kind == BucketKind.QUARTER:
        return [QuarterBucket(year, q) for q in _QUARTERS[:last_index]]
    if kind == BucketKind.HALF:
        return [HalfBucket(year, h) for h in [Half.H1, Half.H2][:last_index]]
    raise InvalidInputError(f"Unknown bucket kind: {kind}")


# ---------------------------------------------------------------------------
# Bi-week date ranges and labels
# ---------------------------------------------------------------------------

def bi_week_date_range(year: int, bi_week: int) -> tuple[date, date]:
    """Monday of ISO week 2*bi_week-1 through the Sunday 13 days later."""
    jan4 = date(year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.isoweekday() - 1)
    start = week1_monday + timedelta(weeks=(bi_week - 1) * 2)
    return start, start + timedelta(days=13)


def _short(d: date) -> str:
    return f"{MONTH_NAMES[d.month - 1][:3]} {d.day}"


def bi_week_range_label(year: int, bi_week: int) -> str:
    start, end = bi_week_date_range(year, bi_week)
    return f"{_short(start)} - {_short(end)}, {year}"


def period_label(bucket: Bucket) -> str:
    if isinstance(bucket, MonthBucket):
        return f"{MONTH_NAMES[bucket.month - 1]} {bucket.year}"
    if isinstance(bucket, BiWeekBucket):
        return f"bi-week {bucket.bi_week} of {bucket.year}"
    if isinstance(bucket, QuarterBucket):
        return f"{QUARTER_NAMES[bucket.quarter]} {bucket.year}"
    if isinstance(bucket, HalfBucket):
        return f"{HALF_NAMES[bucket.half]} {bucket.year}"
    raise InvalidInputError(f"Not a period bucket: {bucket!r}")


def bucket_to_dict(bucket: Bucket) -> dict:
    """Plain JSON form used in API responses and logs."""
    if isinstance(bucket, MonthBucket):
        return {"year": bucket.year, "month": bucket.month}
    if isinstance(bucket, BiWeekBucket):
        return {"year": bucket.year, "biWeek": bucket.bi_week}
    if isinstance(bucket, QuarterBucket):
        return {"year": bucket.year, "quarter": bucket.quarter.value}
    if isinstance(bucket, HalfBucket):
        return {"year": bucket.year, "half": bucket.half.value}
    raise InvalidInputError(f"Not a period bucket: {bucket!r}")
