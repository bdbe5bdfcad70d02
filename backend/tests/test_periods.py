from datetime import date, datetime, timedelta

import pytest

from bhrf.models.enums import BucketKind, Half, Quarter
from bhrf.services.compliance.errors import InvalidInputError
from bhrf.services.compliance.periods import (
    BiWeekBucket,
    HalfBucket,
    MonthBucket,
    QuarterBucket,
    bi_week_bucket_of,
    bi_week_date_range,
    bi_week_range_label,
    bucket_index,
    bucket_of,
    bucket_to_dict,
    current_period,
    elapsed_buckets,
    half_bucket_of,
    iso_week_of,
    month_bucket_of,
    period_label,
    quarter_bucket_of,
)


def test_independence_day_is_q3_and_h2():
    q = quarter_bucket_of(date(2025, 7, 4))
    assert q == QuarterBucket(2025, Quarter.Q3)
    assert half_bucket_of(q) == HalfBucket(2025, Half.H2)


@pytest.mark.parametrize(
    "d, quarter",
    [
        (date(2025, 1, 1), Quarter.Q1),
        (date(2025, 3, 31), Quarter.Q1),
        (date(2025, 4, 1), Quarter.Q2),
        (date(2025, 6, 30), Quarter.Q2),
        (date(2025, 7, 1), Quarter.Q3),
        (date(2025, 10, 1), Quarter.Q4),
        (date(2025, 12, 31), Quarter.Q4),
    ],
)
def test_quarter_boundaries_follow_calendar_month(d, quarter):
    assert quarter_bucket_of(d) == QuarterBucket(d.year, quarter)


def test_dec_31_stays_in_its_calendar_year_for_quarter_and_half():
    # 2024-12-31 is in ISO week 1 of 2025
    d = date(2024, 12, 31)
    assert quarter_bucket_of(d) == QuarterBucket(2024, Quarter.Q4)
    assert bucket_of(BucketKind.HALF, d) == HalfBucket(2024, Half.H2)
    assert bi_week_bucket_of(d) == BiWeekBucket(2025, 1)


def test_bi_week_from_iso_week():
    assert iso_week_of(date(2025, 1, 20)) == (2025, 4)
    assert bi_week_bucket_of(date(2025, 1, 20)) == BiWeekBucket(2025, 2)
    assert bi_week_bucket_of(date(2025, 1, 12)) == BiWeekBucket(2025, 1)


def test_53_week_year_yields_bi_week_27():
    assert bi_week_bucket_of(date(2020, 12, 31)) == BiWeekBucket(2020, 27)
    # Jan 1 2021 still belongs to ISO week 53 of 2020
    assert bi_week_bucket_of(date(2021, 1, 1)) == BiWeekBucket(2020, 27)


def test_month_bucket():
    assert month_bucket_of(date(2025, 3, 1)) == MonthBucket(2025, 3)
    assert month_bucket_of(datetime(2025, 3, 31, 23, 59)) == MonthBucket(2025, 3)


def test_buckets_are_value_equal():
    a = month_bucket_of(date(2025, 3, 2))
    b = month_bucket_of(date(2025, 3, 28))
    assert a == b and a is not b
    assert hash(a) == hash(b)


def test_periods_are_total_and_bounded():
    d = date(2000, 1, 1)
    end = date(2100, 12, 31)
    while d <= end:
        m = month_bucket_of(d)
        q = quarter_bucket_of(d)
        b = bi_week_bucket_of(d)
        assert 1 <= m.month <= 12
        assert 1 <= bucket_index(q) <= 4
        assert 1 <= b.bi_week <= 27
        assert half_bucket_of(q).half == (Half.H1 if d.month <= 6 else Half.H2)
        d += timedelta(days=1)


def test_current_period_dispatch():
    today = date(2025, 5, 10)
    assert current_period(BucketKind.MONTH, today) == MonthBucket(2025, 5)
    assert current_period(BucketKind.QUARTER, today) == QuarterBucket(2025, Quarter.Q2)
    assert current_period(BucketKind.HALF, today) == HalfBucket(2025, Half.H1)
    assert current_period(BucketKind.BI_WEEK, today) == bi_week_bucket_of(today)


def test_missing_date_is_rejected():
    with pytest.raises(InvalidInputError):
        month_bucket_of(None)
    with pytest.raises(InvalidInputError):
        bi_week_bucket_of("2025-01-01")
    with pytest.raises(InvalidInputError):
        half_bucket_of(MonthBucket(2025, 1))


def test_bi_week_date_range():
    assert bi_week_date_range(2025, 1) == (date(2024, 12, 30), date(2025, 1, 12))
    assert bi_week_range_label(2025, 6) == "Mar 10 - Mar 23, 2025"


def test_period_labels():
    assert period_label(MonthBucket(2025, 3)) == "March 2025"
    assert period_label(QuarterBucket(2025, Quarter.Q1)) == "Q1 (Jan-Mar) 2025"
    assert period_label(HalfBucket(2025, Half.H2)) == "H2 (Q3-Q4) 2025"
    assert period_label(BiWeekBucket(2025, 2)) == "bi-week 2 of 2025"


def test_bucket_to_dict():
    assert bucket_to_dict(MonthBucket(2025, 3)) == {"year": 2025, "month": 3}
    assert bucket_to_dict(BiWeekBucket(2025, 2)) == {"year": 2025, "biWeek": 2}
    assert bucket_to_dict(QuarterBucket(2025, Quarter.Q4)) == {"year": 2025, "quarter": "Q4"}
    assert bucket_to_dict(HalfBucket(2025, Half.H1)) == {"year": 2025, "half": "H1"}


def test_elapsed_buckets():
    today = date(2025, 3, 20)
    assert elapsed_buckets(BucketKind.MONTH, 2025, today) == 3
    assert elapsed_buckets(BucketKind.MONTH, 2024, today) == 12
    assert elapsed_buckets(BucketKind.QUARTER, 2026, today) == 0
    assert elapsed_buckets(BucketKind.HALF, 2024, today) == 2
    assert elapsed_buckets(BucketKind.BI_WEEK, 2020, today) == 27
    assert elapsed_buckets(BucketKind.BI_WEEK, 2025, today) == 6
