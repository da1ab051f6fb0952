"""Exceptions raised by the review core.

Unknown severities and annotations on unknown fields are not exceptions:
they are reported through `data_review.review.diagnostics` and rendered with
the neutral treatment or ignored.
"""

from __future__ import annotations

from typing import Optional


class ReviewError(Exception):
    """Base class for review errors."""


class InvalidFieldError(ReviewError, KeyError):
    """A field name outside the record shape was asked to be resolved.

    This is a caller defect, never a data problem.
    """

    def __init__(self, field: str, record_id: Optional[int] = None) -> None:
        self.field = field
        self.record_id = record_id
        where = f" on record {record_id}" if record_id is not None else ""
        super().__init__(f"Unknown field {field!r}{where}")

    def __str__(self) -> str:
        # KeyError repr-quotes its message otherwise
        return str(self.args[0])


class EmptyExportError(ReviewError, ValueError):
    """Export was requested for an empty RecordSet."""

    def __init__(self, message: str = "Nothing to export: the record set is empty") -> None:
        super().__init__(message)


class FetchFailure(ReviewError, RuntimeError):
    """Records could not be retrieved or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to fetch records from {source}: {reason}")


class RecordsNotLoadedError(ReviewError, RuntimeError):
    """Records were used while the fetch is still pending."""

    def __init__(self) -> None:
        super().__init__("Records are still loading")


__all__ = [
    "ReviewError",
    "InvalidFieldError",
    "EmptyExportError",
    "FetchFailure",
    "RecordsNotLoadedError",
]
