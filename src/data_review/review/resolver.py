"""Cell resolution.

Turns a (record, field) pair into what a renderer shows: the display value,
the visual treatment and the tooltip. Resolution is a pure function of its
arguments; diagnostics are the renderer's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from data_review.core.enums import Severity, Treatment
from data_review.core.schemas import RESERVED_FIELDS, is_display_field
from .config import VALID_TREATMENT, style
from .errors import InvalidFieldError
from .models import Record, field_text, has_annotation


@dataclass(frozen=True)
class CellView:
    """Resolved cell.

    Attributes:
        field: Field name the cell was resolved for.
        display_value: Text shown in the cell.
        treatment: Visual treatment.
        tooltip: Annotation message, or None when the field is clean.
        severity: Parsed severity of the annotation, None when clean.
    """

    field: str
    display_value: str
    treatment: Treatment
    tooltip: Optional[str] = None
    severity: Optional[Severity] = None

    @property
    def is_annotated(self) -> bool:
        return self.tooltip is not None


def resolve_cell(record: Record, field: str) -> CellView:
    """Resolve one cell of the review table.

    Args:
        record: Record being rendered.
        field: Display field name. `id` and `errors` yield an empty valid
            cell instead of their contents.

    Returns:
        CellView for the field.

    Raises:
        InvalidFieldError: If `field` is not part of the record shape.

    Examples:
        >>> from data_review.review.models import FieldError
        >>> r = Record(id=1, email="a@b", errors={"email": FieldError("bad domain", "warning")})
        >>> resolve_cell(r, "email").tooltip
        'bad domain'
    """
    if field in RESERVED_FIELDS:
        return CellView(field=field, display_value="", treatment=VALID_TREATMENT)
    if not is_display_field(field):
        raise InvalidFieldError(field, record.id)

    value = field_text(record.value(field))
    if has_annotation(record, field):
        annotation = record.errors[field]
        return CellView(
            field=field,
            display_value=value,
            treatment=style(annotation.severity),
            tooltip=annotation.message,
            severity=annotation.severity,
        )
    return CellView(field=field, display_value=value, treatment=VALID_TREATMENT)


def resolve_row(record: Record, fields: Iterable[str]) -> List[CellView]:
    """Resolve cells for `fields`, in the given order."""
    return [resolve_cell(record, f) for f in fields]
