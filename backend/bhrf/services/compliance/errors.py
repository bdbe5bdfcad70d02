"""Compliance engine exceptions.

InvalidInputError and BucketKindMismatch signal caller bugs (answered with a
500). DuplicateSubmissionError is the user-facing duplicate outcome raised by
the persistence layer (answered with a 400).
"""


class ComplianceEngineError(Exception):
    """Base class for compliance engine errors."""


class InvalidInputError(ComplianceEngineError, ValueError):
    """A required date or argument was missing or of the wrong type."""


class BucketKindMismatch(ComplianceEngineError, TypeError):
    """An event's period bucket does not match the requirement's bucket kind."""


class DuplicateSubmissionError(ValueError):
    """A report already exists for the same facility, task, period and shift."""

    def __init__(self, message: str, existing=None):
        super().__init__(message)
        self.message = message
        self.existing = existing
