from datetime import date, datetime, timedelta
from itertools import combinations

import pytest

from bhrf.models.enums import ExpirationStatus
from bhrf.services.compliance.errors import InvalidInputError
from bhrf.services.compliance.expiration import (
    DatedItem,
    aggregate,
    aggregate_many,
    classify,
    status_counts,
    status_escalated,
    worst,
)

REF = date(2025, 3, 15)

VALID = ExpirationStatus.VALID
SOON = ExpirationStatus.EXPIRING_SOON
EXPIRED = ExpirationStatus.EXPIRED
NO_ITEMS = ExpirationStatus.NO_ITEMS


@pytest.mark.parametrize(
    "expires_at, expected",
    [
        (date(2025, 3, 20), SOON),
        (date(2025, 4, 20), VALID),
        (date(2025, 3, 1), EXPIRED),
        (date(2025, 3, 15), SOON),  # expires today: not yet expired
        (date(2025, 4, 14), SOON),  # exactly 30 days out
        (date(2025, 4, 15), VALID),
        (date(2025, 3, 14), EXPIRED),
    ],
)
def test_classify(expires_at, expected):
    assert classify(DatedItem("doc", expires_at), REF) == expected


def test_no_expiration_date_is_valid():
    assert classify(DatedItem("doc", None), REF) == VALID


def test_datetime_is_reduced_to_civil_date():
    item = DatedItem("doc", datetime(2025, 3, 15, 0, 0))
    assert classify(item, datetime(2025, 3, 15, 18, 30)) == SOON


def test_custom_warning_window():
    item = DatedItem("doc", date(2025, 3, 25))
    assert classify(item, REF, warning_window_days=7) == VALID
    assert classify(item, REF, warning_window_days=10) == SOON


def test_status_is_monotonic_as_expiry_approaches():
    order = {VALID: 0, SOON: 1, EXPIRED: 2}
    previous = VALID
    for offset in range(60, -2, -1):
        status = classify(DatedItem("doc", REF + timedelta(days=offset)), REF)
        assert order[status] >= order[previous]
        previous = status
    assert previous == EXPIRED


@pytest.mark.parametrize("offset", [-400, -1, 0, 10, 30, 31, 365])
def test_exempt_items_are_always_valid(offset):
    item = DatedItem("doc", REF + timedelta(days=offset), exempt=True)
    assert classify(item, REF) == VALID


def test_reference_date_is_required():
    with pytest.raises(InvalidInputError):
        classify(DatedItem("doc", date(2025, 1, 1)), None)
    with pytest.raises(InvalidInputError):
        aggregate([], None)


def test_negative_window_rejected():
    with pytest.raises(InvalidInputError):
        classify(DatedItem("doc", date(2025, 1, 1)), REF, warning_window_days=-1)


def test_aggregate_is_worst_status():
    items = [
        DatedItem("a", date(2025, 9, 1)),
        DatedItem("b", date(2025, 3, 20)),
    ]
    assert aggregate(items, REF) == SOON
    assert aggregate(items + [DatedItem("c", date(2025, 3, 1))], REF) == EXPIRED
    assert aggregate([DatedItem("d", None, exempt=True)], REF) == VALID


def test_empty_collection_is_not_applicable():
    assert aggregate([], REF) == NO_ITEMS
    assert worst() == NO_ITEMS


def test_aggregate_of_union_is_worst_of_parts():
    pool = [
        DatedItem("valid", date(2025, 12, 1)),
        DatedItem("soon", date(2025, 3, 30)),
        DatedItem("expired", date(2024, 12, 1)),
        DatedItem("exempt", date(2020, 1, 1), exempt=True),
    ]
    subsets = [list(c) for n in range(len(pool) + 1) for c in combinations(pool, n)]
    for a in subsets:
        for b in subsets:
            assert aggregate(a + b, REF) == worst(aggregate(a, REF), aggregate(b, REF))


def test_aggregate_many_per_entity():
    groups = {
        "emp-1": [DatedItem("x", date(2025, 3, 1))],
        "emp-2": [DatedItem("y", date(2026, 1, 1))],
        "emp-3": [],
    }
    rollups = aggregate_many(groups, REF)
    assert rollups == {"emp-1": EXPIRED, "emp-2": VALID, "emp-3": NO_ITEMS}

    flattened = [item for items in groups.values() for item in items]
    assert aggregate(flattened, REF) == worst(*rollups.values())


def test_status_counts():
    counts = status_counts([VALID, VALID, SOON, EXPIRED, NO_ITEMS])
    assert counts == {"compliant": 2, "expiringSoon": 1, "nonCompliant": 1, "notApplicable": 1}


def test_status_escalated():
    assert status_escalated(VALID, SOON)
    assert status_escalated(SOON, EXPIRED)
    assert not status_escalated(EXPIRED, VALID)
    assert status_escalated(None, VALID)
