"""
Error types raised by the reconciliation engine.

All of them derive from ValueError so callers that already guard
statement imports with ``except ValueError`` keep working.
"""


class ReconciliationError(ValueError):
    """Base class for reconciliation failures surfaced to the caller."""


class MissingColumnsError(ReconciliationError):
    """The statement header has no date, description or amount column."""

    def __init__(self, missing, headers):
        self.missing = list(missing)
        self.headers = list(headers)
        super().__init__(
            f"Missing required columns: {self.missing} (found headers: {self.headers}). "
            "Please check your CSV format and try again."
        )


class EmptyComparisonInputError(ReconciliationError):
    """A comparison was requested without bank records or user transactions."""
