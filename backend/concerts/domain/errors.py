"""Error types for the concert catalog."""

from __future__ import annotations


class ConcertsError(Exception):
    """Base class for catalog errors."""


class InvalidQueryError(ConcertsError):
    """A query parameter could not be interpreted. Maps to a client error."""


class InvalidMonthError(InvalidQueryError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid month '{token}', expected YYYY-MM")
        self.token = token


class InvalidDateRangeError(InvalidQueryError):
    def __init__(self, date_from, date_to) -> None:
        super().__init__(f"Invalid date range: {date_from} is after {date_to}")
        self.date_from = date_from
        self.date_to = date_to


class DataIntegrityError(ConcertsError):
    """Stored data breaks a catalog invariant (dangling reference, duplicate slug)."""
