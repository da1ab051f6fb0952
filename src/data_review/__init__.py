"""Data Review Tools: review validated records and export them.

The `review` subpackage holds the annotation model, cell resolver, table
renderer and CSV exporter; `sources` fetches records and loads settings; the
CLI lives under `interfaces.cli`.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
