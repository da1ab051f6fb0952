"""Review session lifecycle.

A session starts in LOADING, performs one fetch, and then holds the loaded
RecordSet until the next fetch replaces it wholesale. A failed fetch is
logged and leaves an empty RecordSet so callers never wait forever.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Iterable, Optional

from .diagnostics import Diagnostics
from .errors import FetchFailure, RecordsNotLoadedError
from .exporter import CsvDownload, export_to_csv
from .models import RecordSet
from .renderer import TableRenderer


logger = logging.getLogger(__name__)

Fetcher = Callable[[str], RecordSet]


class SessionState(Enum):
    """
    Session states:
    - LOADING: Fetch pending, records must not be resolved
    - READY: Records (possibly empty after a failure) are available
    """

    LOADING = auto()
    READY = auto()


class ReviewSession:
    """Own the RecordSet for one review and gate access while loading.

    Args:
        source: URL or path handed to the fetcher.
        fetcher: Callable returning a RecordSet or raising FetchFailure.
    """

    def __init__(self, source: str, fetcher: Optional[Fetcher] = None) -> None:
        if fetcher is None:
            from data_review.sources.fetcher import fetch_records

            fetcher = fetch_records
        self.source = source
        self._fetcher = fetcher
        self._state = SessionState.LOADING
        self._in_flight = False
        self._records: Optional[RecordSet] = None
        self.last_error: Optional[FetchFailure] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is SessionState.LOADING

    @property
    def records(self) -> RecordSet:
        if self._records is None:
            raise RecordsNotLoadedError()
        return self._records

    def load(self) -> RecordSet:
        """Fetch records, replacing the current set.

        A call made while a fetch is already running is ignored and returns
        the records currently held (empty if none yet).
        """
        if self._in_flight:
            logger.debug("Fetch already in progress for %s; ignoring", self.source)
            return self._records if self._records is not None else RecordSet.empty()

        self._in_flight = True
        self._state = SessionState.LOADING
        try:
            records = self._fetcher(self.source)
            self.last_error = None
        except FetchFailure as e:
            logger.error("Error fetching records: %s", e)
            records = RecordSet.empty()
            self.last_error = e
        finally:
            self._in_flight = False
            logger.debug("Fetch settled for %s", self.source)

        self._records = records
        self._state = SessionState.READY
        return records

    def renderer(
        self,
        fields: Optional[Iterable[str]] = None,
        diagnostics: Optional[Diagnostics] = None,
        title: str = "Data Review",
    ) -> TableRenderer:
        """Table renderer over the loaded records.

        Raises:
            RecordsNotLoadedError: While the session is loading.
        """
        if self.loading:
            raise RecordsNotLoadedError()
        return TableRenderer(self.records, fields=fields, diagnostics=diagnostics, title=title)

    def export(self, filename: str) -> CsvDownload:
        """Export the loaded records.

        Raises:
            RecordsNotLoadedError: While the session is loading.
            EmptyExportError: If no records are loaded.
        """
        if self.loading:
            raise RecordsNotLoadedError()
        return export_to_csv(self.records, filename)
