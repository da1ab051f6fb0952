"""Record schema and field definitions.

This module defines which record fields are displayable, which are internal
bookkeeping, and the column order used by the exporter. Used by the model,
resolver, renderer and exporter to ensure consistency.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from .enums import DisplayField

if TYPE_CHECKING:  # pragma: no cover
    from data_review.review.models import Record

ID_FIELD = "id"
ERRORS_FIELD = "errors"

# Never rendered as data cells
RESERVED_FIELDS = frozenset({ID_FIELD, ERRORS_FIELD})

DISPLAY_FIELDS: Tuple[str, ...] = tuple(f.value for f in DisplayField)


def get_display_fields() -> List[str]:
    """Get display field names in column order.

    Examples:
        >>> get_display_fields()[:2]
        ['name', 'email']
        >>> "errors" in get_display_fields()
        False
    """
    return list(DISPLAY_FIELDS)


def is_display_field(name: str) -> bool:
    """Return True if `name` is one of the displayable record fields."""
    return name in DISPLAY_FIELDS


def get_export_fields(record: "Record") -> List[str]:
    """Get the exported column names for a record, in its natural order.

    Columns follow the payload key order of the record. Fields the payload
    left out (id or display fields defaulted to empty) are appended after it,
    id first, then display order. The error map is never a column.

    Args:
        record: Record whose field names drive the header.

    Returns:
        List of column names.
    """
    fields = [f for f in record.field_order if f != ERRORS_FIELD]
    for name in (ID_FIELD, *DISPLAY_FIELDS, *record.extras.keys()):
        if name not in fields:
            fields.append(name)
    return fields


def field_label(name: str) -> str:
    """Column heading for a field name.

    Examples:
        >>> field_label("zipcode")
        'Zipcode'
    """
    return name.replace("_", " ").title()
