"""Core utility functions for Data Review Tools.

This module provides shared utilities used across the project.
"""

from __future__ import annotations

from pathlib import Path


def get_export_path(basename: str, export_root: Path) -> Path:
    """Get the CSV path for an export basename.

    Constructs file paths following the standard naming convention:
    - CSV: {export_root}/{basename}.csv

    Args:
        basename: Download name without extension (e.g., "records").
        export_root: Directory exports are written to.

    Returns:
        Path of the CSV file.

    Raises:
        ValueError: If basename is empty or contains a path separator.

    Examples:
        >>> from pathlib import Path
        >>> print(get_export_path("records", Path("data/exports")))
        data/exports/records.csv
    """
    cleaned = (basename or "").strip()
    if not cleaned:
        raise ValueError("Export basename must not be empty")
    if "/" in cleaned or "\\" in cleaned:
        raise ValueError(f"Export basename must not contain path separators: {basename!r}")
    return export_root / f"{cleaned}.csv"
