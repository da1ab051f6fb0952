"""CSV export of the loaded RecordSet.

The export covers every scalar field of every record, not only the visible
columns, and is produced in one piece so it reflects the RecordSet at the
moment of export.

Format:
    - header row first: field names of the first record in payload order,
      comma-separated
    - values as text: None empty, booleans true/false, objects and lists JSON
    - every data value wrapped in double quotes, embedded quotes doubled
    - rows separated by "\\n", no trailing newline
    - UTF-8, media type text/csv
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd

from data_review.core.schemas import ID_FIELD, get_export_fields, is_display_field
from data_review.core.utils import get_export_path
from .errors import EmptyExportError
from .models import Record, RecordSet, field_text


logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"


@dataclass(frozen=True)
class CsvDownload:
    """A ready-to-save CSV download.

    Attributes:
        basename: Download name without extension.
        content: CSV text.
        media_type: Always "text/csv".
    """

    basename: str
    content: str
    media_type: str = CSV_MEDIA_TYPE

    @property
    def filename(self) -> str:
        return f"{self.basename}.csv"

    @property
    def data(self) -> bytes:
        return self.content.encode("utf-8")

    def save(self, export_root: Path) -> Path:
        """Write the download into `export_root`, creating it if needed.

        Returns:
            Path of the written file.
        """
        path = get_export_path(self.basename, export_root)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        logger.info("CSV export saved: %s", path)
        return path


def _export_text(record: Record, name: str) -> str:
    if name != ID_FIELD and not is_display_field(name) and name not in record.extras:
        # Column came from the first record's extras
        return ""
    return field_text(record.value(name))


def render_csv(records: RecordSet) -> str:
    """Serialize records to CSV text.

    Raises:
        EmptyExportError: If `records` is empty.

    Examples:
        >>> rs = RecordSet.from_payload({"records": [{"id": 1, "name": 'Jo "J", Ann'}]})
        >>> render_csv(rs).splitlines()[1].split(",")[:2]
        ['"1"', '"Jo ""J""']
    """
    if len(records) == 0:
        raise EmptyExportError()

    header: List[str] = get_export_fields(records[0])
    rows = [[_export_text(record, name) for name in header] for record in records]
    frame = pd.DataFrame(rows, columns=header, dtype=object)

    header_line = pd.DataFrame(columns=header).to_csv(index=False, lineterminator="\n")
    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        doublequote=True,
        lineterminator="\n",
    )
    text = header_line + body
    return text[:-1] if text.endswith("\n") else text


def export_to_csv(records: RecordSet, filename: str) -> CsvDownload:
    """Export records as a CSV download named `<filename>.csv`.

    Args:
        records: RecordSet to export, in display order.
        filename: Download name without the ".csv" extension.

    Returns:
        CsvDownload holding the serialized text.

    Raises:
        EmptyExportError: If `records` is empty; no download is produced.
        ValueError: If `filename` is empty or contains a path separator.
    """
    get_export_path(filename, Path("."))  # validates the name before any work
    content = render_csv(records)
    logger.debug("Exported %d records as %s.csv", len(records), filename.strip())
    return CsvDownload(basename=filename.strip(), content=content)
