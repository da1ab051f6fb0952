import argparse
import functools
import logging
from pathlib import Path
from typing import Optional

import colorlog

from data_review.core.enums import Severity
from data_review.review.errors import EmptyExportError, InvalidFieldError
from data_review.review.models import summarize_annotations
from data_review.review.session import ReviewSession
from data_review.sources.fetcher import fetch_records
from data_review.sources.settings import ReviewSettings, load_settings

OUTPUT_FORMATS = ["console", "markdown", "html", "json"]

try:
    from data_review import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _resolve_settings(args: argparse.Namespace) -> Optional[ReviewSettings]:
    config = getattr(args, "config", None)
    try:
        settings = load_settings(Path(config) if config else None)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid configuration: %s", e)
        return None
    except OSError as e:
        logging.error("Failed to read configuration: %s", e)
        return None
    return settings


def _open_session(args: argparse.Namespace, settings: ReviewSettings) -> ReviewSession:
    source = getattr(args, "source", None) or settings.source
    fetcher = functools.partial(fetch_records, timeout=settings.timeout)
    session = ReviewSession(source, fetcher=fetcher)
    logging.info("Loading records from %s...", source)
    session.load()
    return session


def cmd_show(args: argparse.Namespace) -> int:
    """Render the review table.

    Returns:
        0 if the table was rendered from fetched records
        1 if the fetch failed (an empty table is still rendered)
        2 on configuration or usage errors, including an unknown --detail id
          when records were loaded
    """
    settings = _resolve_settings(args)
    if settings is None:
        return 2
    session = _open_session(args, settings)

    try:
        renderer = session.renderer(fields=settings.fields, title=settings.title)
    except InvalidFieldError as e:
        logging.error("Invalid table fields: %s", e)
        return 2

    detail = getattr(args, "detail", None)
    if detail is not None:
        try:
            renderer.select(int(detail))
        except (KeyError, ValueError):
            if session.last_error is not None:
                logging.error("No records loaded: %s", session.last_error)
                return 1
            logging.error("No record with id %s", detail)
            return 2

    fmt = getattr(args, "format", None) or "console"
    renditions = {
        "console": renderer.to_console,
        "markdown": renderer.to_markdown,
        "html": renderer.to_html,
        "json": renderer.to_json,
    }
    content = renditions[fmt]()

    output = getattr(args, "output", None)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(content)
        logging.info("Review table saved: %s", out_path)
    else:
        print(content)

    return 1 if session.last_error is not None else 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export the loaded records to <export-root>/<basename>.csv.

    Returns:
        0 if the file was written
        1 if nothing was exported (fetch failed or no records)
        2 on configuration or usage errors
    """
    settings = _resolve_settings(args)
    if settings is None:
        return 2
    session = _open_session(args, settings)
    if session.last_error is not None:
        logging.error("Nothing exported: %s", session.last_error)
        return 1

    basename = getattr(args, "basename", None) or settings.export_basename
    export_root = Path(getattr(args, "export_root", None) or settings.export_root).resolve()
    try:
        download = session.export(basename)
    except EmptyExportError as e:
        logging.warning("%s; no file written.", e)
        return 1
    except ValueError as e:
        logging.error("Invalid export name: %s", e)
        return 2

    try:
        path = download.save(export_root)
    except OSError as e:
        logging.error("Failed to write export: %s", e)
        return 1
    print(path)
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Print annotation counts per field and severity."""
    settings = _resolve_settings(args)
    if settings is None:
        return 2
    session = _open_session(args, settings)
    if session.last_error is not None:
        return 1

    counts = summarize_annotations(session.records)
    print(f"Records: {len(session.records)}")
    if counts.empty:
        print("✅ No annotations found.")
        return 0
    print(counts.to_string())
    unknown = int(counts[Severity.UNKNOWN.value].sum())
    if unknown:
        logging.warning("%d annotations have an unrecognised severity", unknown)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="data-review",
        description=f"Data Review Tools (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to review.yaml (defaults to config/review.yaml when present)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="Render the review table")
    p_show.add_argument(
        "--source",
        default=None,
        help="URL or JSON file with {\"records\": [...]} (overrides config)",
    )
    p_show.add_argument(
        "--format",
        type=str.lower,
        choices=OUTPUT_FORMATS,
        default="console",
        help="Output format (case insensitive). Defaults to console.",
    )
    p_show.add_argument(
        "--detail",
        default=None,
        help="Open the error detail for this record id",
    )
    p_show.add_argument(
        "--output",
        default=None,
        help="Write the rendered table to this file instead of stdout",
    )
    p_show.set_defaults(func=cmd_show)

    p_export = sub.add_parser("export", help="Export the loaded records to CSV")
    p_export.add_argument(
        "--source",
        default=None,
        help="URL or JSON file with {\"records\": [...]} (overrides config)",
    )
    p_export.add_argument(
        "--basename",
        default=None,
        help="Download name without .csv (defaults to config, then 'records')",
    )
    p_export.add_argument(
        "--export-root",
        default=None,
        help="Directory the CSV is written to (defaults to ./data/exports)",
    )
    p_export.set_defaults(func=cmd_export)

    p_summary = sub.add_parser("summary", help="Count annotations per field and severity")
    p_summary.add_argument(
        "--source",
        default=None,
        help="URL or JSON file with {\"records\": [...]} (overrides config)",
    )
    p_summary.set_defaults(func=cmd_summary)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
