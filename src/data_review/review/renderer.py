"""Review table rendering.

This module composes resolved cells into table rows and owns the error detail
view for one record at a time:
- DetailState: Closed, or open for one record id
- TableRenderer: Rows in RecordSet order plus console, Markdown, HTML and
  JSON renditions
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from data_review.core.enums import Severity, Treatment
from data_review.core.schemas import (
    DISPLAY_FIELDS,
    RESERVED_FIELDS,
    field_label,
    get_display_fields,
    is_display_field,
)
from .config import get_style_attributes, style
from .diagnostics import Diagnostics, LoggingDiagnostics
from .errors import InvalidFieldError
from .models import Record, RecordSet
from .resolver import CellView, resolve_row


@dataclass(frozen=True)
class DetailState:
    """Which record's error detail is open, if any.

    Examples:
        >>> DetailState.closed().is_open
        False
        >>> DetailState.opened(3).record_id
        3
    """

    record_id: Optional[int] = None

    @classmethod
    def closed(cls) -> "DetailState":
        return cls(None)

    @classmethod
    def opened(cls, record_id: int) -> "DetailState":
        return cls(record_id)

    @property
    def is_open(self) -> bool:
        return self.record_id is not None


@dataclass(frozen=True)
class ErrorEntry:
    """One line of the error detail view."""

    field: str
    message: str
    severity: Severity
    severity_raw: Optional[str]
    treatment: Treatment
    known_field: bool


@dataclass(frozen=True)
class RowView:
    record_id: int
    cells: List[CellView]
    error_count: int


class TableRenderer:
    """Render a RecordSet as a review table.

    Rows follow RecordSet order and cells follow the caller's field order.
    Selecting a record opens its error detail; selecting another replaces it
    and dismissing clears it.

    Args:
        records: Records to render.
        fields: Column order. Defaults to all display fields. `id` and
            `errors` are accepted and render as empty cells.
        diagnostics: Receives malformed-annotation and unknown-severity
            reports. Defaults to LoggingDiagnostics.
        title: Heading used by the Markdown and HTML renditions.

    Raises:
        InvalidFieldError: If a requested column is outside the record shape.
    """

    def __init__(
        self,
        records: RecordSet,
        fields: Optional[Iterable[str]] = None,
        diagnostics: Optional[Diagnostics] = None,
        title: str = "Data Review",
    ) -> None:
        self.fields: List[str] = list(fields) if fields is not None else get_display_fields()
        for name in self.fields:
            if not is_display_field(name) and name not in RESERVED_FIELDS:
                raise InvalidFieldError(name)
        self.records = records
        self.diagnostics: Diagnostics = (
            diagnostics if diagnostics is not None else LoggingDiagnostics()
        )
        self.title = title
        self._detail = DetailState.closed()

    # ------------------------------------------------------------------
    # Detail view state
    # ------------------------------------------------------------------

    @property
    def detail(self) -> DetailState:
        return self._detail

    def select(self, record_id: int) -> List[ErrorEntry]:
        """Open the error detail for a record, replacing any open one.

        Returns:
            The detail entries of the selected record.

        Raises:
            KeyError: If no record has this id.
        """
        if self.records.get(record_id) is None:
            raise KeyError(f"Unknown record id: {record_id}")
        self._detail = DetailState.opened(record_id)
        return self.detail_entries()

    def dismiss(self) -> None:
        self._detail = DetailState.closed()

    def detail_entries(self) -> List[ErrorEntry]:
        """Entries of the open detail view, empty when closed.

        Display fields come first in display order, then annotations on
        unknown fields sorted by name. Messages are always included, also for
        unrecognised severities.
        """
        if not self._detail.is_open:
            return []
        record = self.records.get(self._detail.record_id)
        if record is None:
            return []
        names = [f for f in DISPLAY_FIELDS if f in record.errors]
        names += record.malformed_annotation_keys()
        entries = []
        for name in names:
            err = record.errors[name]
            entries.append(
                ErrorEntry(
                    field=name,
                    message=err.message,
                    severity=err.severity,
                    severity_raw=err.severity_raw,
                    treatment=style(err.severity),
                    known_field=is_display_field(name),
                )
            )
        return entries

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def rows(self) -> List[RowView]:
        """Resolve every row, reporting diagnostics once per record."""
        result = []
        for record in self.records:
            cells = resolve_row(record, self.fields)
            self._report(record, cells)
            result.append(RowView(record_id=record.id, cells=cells, error_count=len(record.errors)))
        return result

    def _report(self, record: Record, cells: List[CellView]) -> None:
        malformed = record.malformed_annotation_keys()
        if malformed:
            self.diagnostics.malformed_annotation(record.id, malformed)
        for cell in cells:
            if cell.severity is Severity.UNKNOWN:
                self.diagnostics.unknown_severity(
                    record.id, cell.field, record.errors[cell.field].severity_raw
                )

    def headers(self) -> List[str]:
        return [field_label(f) for f in self.fields] + ["Errors"]

    # ------------------------------------------------------------------
    # Renditions
    # ------------------------------------------------------------------

    def to_console(self) -> str:
        """Plain-text table with treatment icons and footnoted tooltips."""
        rows = self.rows()
        table = [self.headers()]
        notes = []
        for row in rows:
            line = []
            for cell in row.cells:
                icon = get_style_attributes(cell.treatment)["icon"]
                line.append(f"{icon} {cell.display_value}".rstrip())
                if cell.is_annotated:
                    notes.append(f"  [{row.record_id}] {cell.field} {icon} {cell.tooltip}")
            line.append(str(row.error_count))
            table.append(line)

        widths = [max(len(r[i]) for r in table) for i in range(len(table[0]))]
        lines = ["  ".join(v.ljust(w) for v, w in zip(r, widths)).rstrip() for r in table]
        lines.insert(1, "  ".join("-" * w for w in widths))
        if not rows:
            lines.append("No records.")
        if notes:
            lines += ["", "Notes:", *notes]
        if self._detail.is_open:
            lines += ["", f"Errors for record {self._detail.record_id}:"]
            entries = self.detail_entries()
            if not entries:
                lines.append("  (none)")
            for entry in entries:
                icon = get_style_attributes(entry.treatment)["icon"]
                lines.append(
                    f"  {icon} {entry.field} ({entry.severity_raw or entry.severity.value}): "
                    f"{entry.message}"
                )
        return "\n".join(lines)

    def to_markdown(self) -> str:
        """Markdown table; tooltips become a Notes list below the table."""
        rows = self.rows()
        headers = self.headers()
        lines = [
            f"# {self.title}",
            "",
            "| " + " | ".join(headers) + " |",
            "|" + "|".join("---" for _ in headers) + "|",
        ]
        notes = []
        for row in rows:
            values = []
            for cell in row.cells:
                icon = get_style_attributes(cell.treatment)["icon"]
                values.append(f"{icon} {_md(cell.display_value)}".rstrip())
                if cell.is_annotated:
                    notes.append(
                        f"- **{row.record_id} / {cell.field}** {icon} {_md(cell.tooltip or '')}"
                    )
            values.append(str(row.error_count))
            lines.append("| " + " | ".join(values) + " |")
        lines.append("")
        if not rows:
            lines += ["No records.", ""]
        if notes:
            lines += ["## Notes", "", *notes, ""]
        if self._detail.is_open:
            lines += [f"## Errors for record {self._detail.record_id}", ""]
            entries = self.detail_entries()
            if not entries:
                lines.append("No errors.")
            for i, entry in enumerate(entries, start=1):
                icon = get_style_attributes(entry.treatment)["icon"]
                lines.append(
                    f"{i}. {icon} **{entry.field}** "
                    f"({entry.severity_raw or entry.severity.value}): {_md(entry.message)}"
                )
            lines.append("")
        return "\n".join(lines)

    def to_html(self) -> str:
        """HTML table; treatments are CSS classes and tooltips `title` attributes."""
        esc = html.escape
        rows = self.rows()
        parts = [f'<h1 class="review-title">{esc(self.title)}</h1>', '<table class="review-table">']
        parts.append(
            "<thead><tr>" + "".join(f'<th scope="col">{esc(h)}</th>' for h in self.headers())
            + "</tr></thead>"
        )
        parts.append("<tbody>")
        for row in rows:
            cells = []
            for cell in row.cells:
                css = get_style_attributes(cell.treatment)["css_class"]
                title = f' title="{esc(cell.tooltip)}"' if cell.tooltip is not None else ""
                cells.append(
                    f'<td class="{css}" data-field="{esc(cell.field)}"{title}>'
                    f"{esc(cell.display_value)}</td>"
                )
            cells.append(
                f'<td class="errors-summary"><button type="button" '
                f'data-record-id="{row.record_id}">{row.error_count}</button></td>'
            )
            parts.append(f'<tr data-record-id="{row.record_id}">' + "".join(cells) + "</tr>")
        parts.append("</tbody></table>")
        if self._detail.is_open:
            parts.append(f'<aside class="error-detail" data-record-id="{self._detail.record_id}">')
            parts.append(f"<h2>Errors for record {self._detail.record_id}</h2>")
            parts.append("<ol>")
            for entry in self.detail_entries():
                css = get_style_attributes(entry.treatment)["css_class"]
                severity = entry.severity_raw or entry.severity.value
                parts.append(
                    f'<li class="{css}"><strong>{esc(entry.field)}</strong> '
                    f"({esc(severity)}): {esc(entry.message)}</li>"
                )
            parts.append("</ol></aside>")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        detail = None
        if self._detail.is_open:
            detail = {
                "record_id": self._detail.record_id,
                "entries": [
                    {
                        "field": e.field,
                        "message": e.message,
                        "severity": e.severity_raw,
                        "treatment": e.treatment.value,
                        "known_field": e.known_field,
                    }
                    for e in self.detail_entries()
                ],
            }
        return {
            "title": self.title,
            "fields": list(self.fields),
            "rows": [
                {
                    "id": row.record_id,
                    "error_count": row.error_count,
                    "cells": [
                        {
                            "field": c.field,
                            "value": c.display_value,
                            "treatment": c.treatment.value,
                            "tooltip": c.tooltip,
                        }
                        for c in row.cells
                    ],
                }
                for row in self.rows()
            ],
            "detail": detail,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def _md(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", "<br>")
