from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from data_review.review.errors import FetchFailure
from data_review.review.models import RecordSet


DEFAULT_TIMEOUT = 30.0


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_url(source: str, timeout: float, client: Optional[httpx.Client]) -> Any:
    logger = logging.getLogger(__name__)
    own_client = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        logger.debug("GET %s", source)
        response = http.get(source, timeout=timeout)
        response.raise_for_status()
        return response.json()
    finally:
        if own_client:
            http.close()


def _read_file(source: str) -> Any:
    path = Path(source)
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def fetch_records(
    source: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> RecordSet:
    """Fetch and parse a `{"records": [...]}` payload.

    URLs (http/https) are requested with httpx; anything else is read as a
    local UTF-8 JSON file.

    Args:
        source: URL or file path.
        timeout: Request timeout in seconds.
        client: Optional httpx client (its transport is reused, not closed).

    Returns:
        RecordSet in payload order.

    Raises:
        FetchFailure: On transport, HTTP status, JSON or payload shape errors.
    """
    logger = logging.getLogger(__name__)
    try:
        payload = _fetch_url(source, timeout, client) if _is_url(source) else _read_file(source)
    except httpx.HTTPStatusError as e:
        raise FetchFailure(source, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise FetchFailure(source, f"{type(e).__name__}: {e}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise FetchFailure(source, str(e)) from e

    try:
        records = RecordSet.from_payload(payload)
    except ValueError as e:
        raise FetchFailure(source, f"malformed payload: {e}") from e
    logger.info("Fetched %d records from %s", len(records), source)
    return records
