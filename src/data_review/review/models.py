"""Review data models.

This module defines the error annotation model consumed by the review table:
- FieldError: A validation message plus severity attached to one field
- Record: One reviewed record with its error map
- RecordSet: Ordered, immutable collection of records from one fetch
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from data_review.core.enums import Severity
from data_review.core.schemas import (
    DISPLAY_FIELDS,
    ERRORS_FIELD,
    ID_FIELD,
    RESERVED_FIELDS,
    is_display_field,
)
from .errors import InvalidFieldError

ErrorMap = Mapping[str, "FieldError"]

# Allowed display field values; None is also accepted
SCALAR_TYPES = (str, int, float, bool)


def field_text(value: Any) -> str:
    """Textual form of a field value, shared by the table and the CSV export.

    Examples:
        >>> field_text(None), field_text(True), field_text(2.5)
        ('', 'true', '2.5')
        >>> field_text({"a": 1})
        '{"a": 1}'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@dataclass(frozen=True)
class FieldError:
    """Validation annotation attached to a single field.

    Attributes:
        message: Human-readable description of the problem.
        severity_raw: Severity exactly as received from the validator.

    Examples:
        >>> FieldError(message="bad domain", severity_raw="warning").severity
        <Severity.WARNING: 'warning'>
    """

    message: str
    severity_raw: Optional[str]

    @property
    def severity(self) -> Severity:
        return Severity.parse(self.severity_raw)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldError":
        if not isinstance(data, Mapping):
            raise ValueError(f"Field error must be an object, got {type(data).__name__}")
        message = data.get("message")
        severity = data.get("severity")
        return cls(
            message="" if message is None else str(message),
            severity_raw=None if severity is None else str(severity),
        )


@dataclass(frozen=True)
class Record:
    """A reviewed record and its per-field annotations.

    Attributes:
        id: Stable identity, unique within a RecordSet.
        name, email, street, city, zipcode, phone, status: Display fields.
        errors: Read-only map of field name to FieldError.
        extras: Additional payload keys, exported but never displayed.
        field_order: Payload key order, `errors` excluded. Drives the export
            header.
    """

    id: int
    name: Any = ""
    email: Any = ""
    street: Any = ""
    city: Any = ""
    zipcode: Any = ""
    phone: Any = ""
    status: Any = ""
    errors: ErrorMap = field(default_factory=dict)
    extras: Mapping[str, Any] = field(default_factory=dict)
    field_order: Tuple[str, ...] = field(default_factory=tuple, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError(f"Record id must be an integer, got {self.id!r}")
        for name in DISPLAY_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, SCALAR_TYPES):
                raise ValueError(
                    f"Record {self.id}: field '{name}' must be a scalar value, "
                    f"got {type(value).__name__}"
                )
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))
        object.__setattr__(self, "field_order", tuple(self.field_order))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """Build a record from one parsed payload item.

        Missing display fields become empty strings. Keys that are neither
        display fields nor reserved are kept as extras, in payload order.

        Raises:
            ValueError: If the item is not an object, the id is not an
                integer, a display field holds an object or list, or the
                error map is not an object of objects.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")

        raw_errors = data.get(ERRORS_FIELD) or {}
        if not isinstance(raw_errors, Mapping):
            raise ValueError(
                f"Record {data.get(ID_FIELD)!r}: errors must be an object, "
                f"got {type(raw_errors).__name__}"
            )
        errors = {str(k): FieldError.from_dict(v) for k, v in raw_errors.items()}

        extras = {
            k: v for k, v in data.items() if k not in RESERVED_FIELDS and not is_display_field(k)
        }
        values = {name: data.get(name, "") for name in DISPLAY_FIELDS}
        order = tuple(str(k) for k in data if k != ERRORS_FIELD)
        return cls(
            id=data.get(ID_FIELD), errors=errors, extras=extras, field_order=order, **values
        )

    def value(self, name: str) -> Any:
        """Return the raw value of an id, display or extra field.

        Raises:
            InvalidFieldError: For `errors` or any name outside the record shape.
        """
        if name == ID_FIELD:
            return self.id
        if is_display_field(name):
            return getattr(self, name)
        if name in self.extras:
            return self.extras[name]
        raise InvalidFieldError(name, self.id)

    def malformed_annotation_keys(self) -> List[str]:
        """Error map keys that do not name a display field, sorted."""
        return sorted(k for k in self.errors if not is_display_field(k))


def has_annotation(record: Record, field_name: str) -> bool:
    """Return True if the record carries an annotation for `field_name`."""
    return field_name in record.errors


class RecordSet(Sequence[Record]):
    """Ordered records from one fetch.

    The set is never mutated; a new fetch replaces it wholesale.

    Examples:
        >>> rs = RecordSet.from_payload({"records": [{"id": 1, "name": "Ann"}]})
        >>> len(rs), rs.get(1).name
        (1, 'Ann')
    """

    def __init__(self, records: Sequence[Record] = ()) -> None:
        records = tuple(records)
        seen: set[int] = set()
        for record in records:
            if record.id in seen:
                raise ValueError(f"Duplicate record id: {record.id}")
            seen.add(record.id)
        self._records: Tuple[Record, ...] = records
        self._by_id: Dict[int, Record] = {r.id: r for r in records}

    @classmethod
    def empty(cls) -> "RecordSet":
        return cls(())

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RecordSet":
        """Build a RecordSet from a parsed `{"records": [...]}` payload.

        Raises:
            ValueError: If the payload does not have that shape.
        """
        if not isinstance(payload, Mapping) or "records" not in payload:
            raise ValueError("Payload must be an object with a 'records' list")
        items = payload["records"]
        if not isinstance(items, list):
            raise ValueError(f"'records' must be a list, got {type(items).__name__}")
        return cls([Record.from_dict(item) for item in items])

    def __getitem__(self, index):  # type: ignore[override]
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"RecordSet({len(self._records)} records)"

    def get(self, record_id: int) -> Optional[Record]:
        return self._by_id.get(record_id)

    def ids(self) -> List[int]:
        return [r.id for r in self._records]


ANNOTATION_COLUMNS = ["record_id", "field", "severity", "message", "known_field"]


def annotation_frame(records: RecordSet) -> pd.DataFrame:
    """Flatten all annotations into a long-form DataFrame.

    One row per (record, annotated field), in RecordSet order. `severity`
    holds the parsed severity value, so unrecognised severities read "unknown".
    """
    rows = [
        {
            "record_id": record.id,
            "field": name,
            "severity": err.severity.value,
            "message": err.message,
            "known_field": is_display_field(name),
        }
        for record in records
        for name, err in record.errors.items()
    ]
    return pd.DataFrame(rows, columns=ANNOTATION_COLUMNS)


def summarize_annotations(records: RecordSet) -> pd.DataFrame:
    """Count annotations per field and severity.

    Returns:
        DataFrame indexed by field with one column per severity, zero-filled,
        plus a `total` column. Fields are ordered by display order, then any
        unknown fields alphabetically.
    """
    severities = [s.value for s in Severity]
    frame = annotation_frame(records)
    if frame.empty:
        return pd.DataFrame(columns=[*severities, "total"], dtype="int64").rename_axis("field")

    counts = (
        frame.groupby(["field", "severity"]).size().unstack(fill_value=0)
        .reindex(columns=severities, fill_value=0)
    )
    order = [f for f in DISPLAY_FIELDS if f in counts.index]
    order += sorted(f for f in counts.index if f not in DISPLAY_FIELDS)
    counts = counts.reindex(order)
    counts["total"] = counts.sum(axis=1)
    counts.columns.name = None
    return counts.astype("int64")
