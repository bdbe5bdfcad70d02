"""Expiration classification and compliance rollups.

Classifies expirable items relative to a reference date:
  EXPIRED:        expires_at < reference_date
  EXPIRING_SOON:  reference_date <= expires_at <= reference_date + 30 days
  VALID:          later, no expiration date, or exempt ("no expiration")

A rollup is the worst status present, EXPIRED > EXPIRING_SOON > VALID.
An empty collection rolls up to NO_ITEMS ("N/A"), which is not "Compliant".
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Hashable

from bhrf.models.enums import ExpirationStatus

from .errors import InvalidInputError

DEFAULT_WARNING_WINDOW_DAYS = 30

_RANK = {
    ExpirationStatus.NO_ITEMS: 0,
    ExpirationStatus.VALID: 1,
    ExpirationStatus.EXPIRING_SOON: 2,
    ExpirationStatus.EXPIRED: 3,
}


@dataclass(frozen=True)
class DatedItem:
    id: Hashable
    expires_at: date | None
    exempt: bool = False


def _civil(d, what: str) -> date:
    if d is None:
        raise InvalidInputError(f"{what} is required")
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    raise InvalidInputError(f"{what} must be a date, got {type(d).__name__}")


def classify(
    item: DatedItem,
    reference_date: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> ExpirationStatus:
    """Classify one item's expiration status as of `reference_date`."""
    reference = _civil(reference_date, "reference_date")
    if warning_window_days < 0:
        raise InvalidInputError("warning_window_days must not be negative")

    if item.exempt or item.expires_at is None:
        return ExpirationStatus.VALID

    expires = _civil(item.expires_at, "expires_at")
    if expires < reference:
        return ExpirationStatus.EXPIRED
    if expires <= reference + timedelta(days=warning_window_days):
        return ExpirationStatus.EXPIRING_SOON
    return ExpirationStatus.VALID


def worst(*statuses: ExpirationStatus) -> ExpirationStatus:
    """Most severe of the given statuses; NO_ITEMS when none are given."""
    result = ExpirationStatus.NO_ITEMS
    for status in statuses:
        if _RANK[status] > _RANK[result]:
            result = status
    return result


def aggregate(
    items: Iterable[DatedItem],
    reference_date: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> ExpirationStatus:
    """Roll many items up to one status (worst wins)."""
    _civil(reference_date, "reference_date")
    return worst(*(classify(i, reference_date, warning_window_days) for i in items))


def aggregate_many(
    groups: Mapping[Hashable, Iterable[DatedItem]],
    reference_date: date,
    warning_window_days: int = DEFAULT_WARNING_WINDOW_DAYS,
) -> dict[Hashable, ExpirationStatus]:
    """Per-entity rollup, e.g. one status per employee."""
    return {
        entity_id: aggregate(items, reference_date, warning_window_days)
        for entity_id, items in groups.items()
    }


def status_counts(statuses: Iterable[ExpirationStatus]) -> dict:
    """Summary card counts for a list of rollup statuses."""
    counts = {"compliant": 0, "expiringSoon": 0, "nonCompliant": 0, "notApplicable": 0}
    keys = {
        ExpirationStatus.VALID: "compliant",
        ExpirationStatus.EXPIRING_SOON: "expiringSoon",
        ExpirationStatus.EXPIRED: "nonCompliant",
        ExpirationStatus.NO_ITEMS: "notApplicable",
    }
    for status in statuses:
        counts[keys[status]] += 1
    return counts


def status_escalated(old: ExpirationStatus | None, new: ExpirationStatus) -> bool:
    """Check if a stored status has become more urgent."""
    return _RANK[new] > _RANK.get(old, 0)
