"""
Exceptions for the Comparable Valuation Engine.

Only malformed upstream data raises. Numeric edge cases (empty cohort,
zero weights, near-zero baselines) are handled by guard clauses in the
stages and never surface as exceptions.
"""


class ValuationError(Exception):
    """Base class for valuation engine errors."""
    pass


class UnknownCategoryError(ValuationError, ValueError):
    """Raised when a stat category key is not present in the registry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown stat category: {key!r}")


class MalformedContractError(ValuationError, ValueError):
    """Raised when a reference contract carries impossible values."""
    pass


class SubjectNotFoundError(ValuationError, LookupError):
    """Raised by a cohort source when the subject cannot be resolved."""

    def __init__(self, subject_id: str):
        self.subject_id = subject_id
        super().__init__(f"Subject not found: {subject_id!r}")
