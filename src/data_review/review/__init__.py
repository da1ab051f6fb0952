"""Review core for Data Review Tools.

This module provides the validation-annotation review pipeline:

- **Models**: FieldError, Record, RecordSet - annotation data structures
- **Resolver**: resolve_cell() - value, treatment and tooltip for one cell
- **Renderer**: TableRenderer - rows, detail view and text/HTML/JSON output
- **Exporter**: export_to_csv() - lossless CSV download of a RecordSet
- **Session**: ReviewSession - fetch lifecycle and loading gate

Usage:
    >>> from data_review.review import ReviewSession
    >>> session = ReviewSession("data/records.json")
    >>> records = session.load()
    >>> print(session.renderer().to_console())
    >>> from pathlib import Path
    >>> session.export("records").save(Path("data/exports"))

For implementation details:
    - See review/config.py for the severity to treatment table
    - See review/diagnostics.py for malformed annotation reporting
"""

from __future__ import annotations

from .config import style
from .diagnostics import CollectingDiagnostics, Diagnostics, LoggingDiagnostics
from .errors import (
    EmptyExportError,
    FetchFailure,
    InvalidFieldError,
    RecordsNotLoadedError,
    ReviewError,
)
from .exporter import CsvDownload, export_to_csv, render_csv
from .models import FieldError, Record, RecordSet, has_annotation
from .renderer import DetailState, TableRenderer
from .resolver import CellView, resolve_cell
from .session import ReviewSession, SessionState

__all__ = [
    # Data models
    "FieldError",
    "Record",
    "RecordSet",
    "has_annotation",
    # Resolution and rendering
    "CellView",
    "resolve_cell",
    "style",
    "DetailState",
    "TableRenderer",
    # Export
    "CsvDownload",
    "export_to_csv",
    "render_csv",
    # Session
    "ReviewSession",
    "SessionState",
    # Diagnostics
    "Diagnostics",
    "LoggingDiagnostics",
    "CollectingDiagnostics",
    # Errors
    "ReviewError",
    "InvalidFieldError",
    "EmptyExportError",
    "FetchFailure",
    "RecordsNotLoadedError",
]
