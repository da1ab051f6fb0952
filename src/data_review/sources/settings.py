from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import yaml

from data_review.core.schemas import DISPLAY_FIELDS, is_display_field


DEFAULT_CONFIG_PATH = Path("config/review.yaml")


@dataclass(frozen=True)
class ReviewSettings:
    """Settings for fetching, rendering and exporting records."""

    source: str = "data/records.json"
    timeout: float = 30.0
    export_root: Path = Path("data/exports")
    export_basename: str = "records"
    title: str = "Data Review"
    fields: Tuple[str, ...] = field(default=DISPLAY_FIELDS)


def load_settings(config_file: Optional[Path] = None) -> ReviewSettings:
    """Load and validate review settings from YAML.

    Args:
        config_file: Path to the YAML file. When None, defaults are returned
            unless config/review.yaml exists in the working directory.

    Raises:
        FileNotFoundError: If an explicit config file does not exist.
        ValueError: If the YAML is not a mapping or names unknown fields.
    """
    if config_file is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return ReviewSettings()
        config_file = DEFAULT_CONFIG_PATH
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    try:
        with config_file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse config file {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_file}")

    defaults = ReviewSettings()
    fetch = data.get("fetch", {}) or {}
    export = data.get("export", {}) or {}
    table = data.get("table", {}) or {}

    fields = tuple(str(f) for f in (table.get("fields") or defaults.fields))
    unknown = [f for f in fields if not is_display_field(f)]
    if unknown:
        raise ValueError(
            f"Unknown table fields in {config_file}: {', '.join(unknown)}. "
            f"Valid fields: {', '.join(DISPLAY_FIELDS)}"
        )

    return ReviewSettings(
        source=str(fetch.get("source", defaults.source)),
        timeout=float(fetch.get("timeout", defaults.timeout)),
        export_root=Path(export.get("root", defaults.export_root)),
        export_basename=str(export.get("basename", defaults.export_basename)),
        title=str(table.get("title", defaults.title)),
        fields=fields,
    )
