"""Facility compliance health.

Health is derived from the number of open issues, where an issue is an
expiring or expired facility document or an admin task still outstanding
for the current period:
  good:     0 issues
  warning:  1-2 issues
  danger:   3+ issues
"""

from bhrf.models.enums import ComplianceHealth, ExpirationStatus

WARNING_MAX_ISSUES = 2


def compliance_health(document_issues: int, admin_task_issues: int) -> ComplianceHealth:
    total = document_issues + admin_task_issues
    if total == 0:
        return ComplianceHealth.GOOD
    if total <= WARNING_MAX_ISSUES:
        return ComplianceHealth.WARNING
    return ComplianceHealth.DANGER


def count_document_issues(statuses) -> int:
    """Count statuses that need attention (expiring soon or expired)."""
    return sum(
        1 for s in statuses
        if s in (ExpirationStatus.EXPIRING_SOON, ExpirationStatus.EXPIRED)
    )
