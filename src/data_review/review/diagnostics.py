"""Diagnostics sink for annotation problems that must not break rendering.

Two conditions are reported here instead of raised:
- malformed annotation: an error map key that names no display field
- unknown severity: a severity outside the recognised set

Implementations follow the `Diagnostics` protocol; no inheritance needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple


logger = logging.getLogger(__name__)


class Diagnostics(Protocol):
    """Protocol for collaborators that receive annotation diagnostics."""

    def malformed_annotation(self, record_id: int, keys: Sequence[str]) -> None:
        """Record error map keys that do not match any display field."""
        ...

    def unknown_severity(self, record_id: int, field_name: str, raw: Optional[str]) -> None:
        """Record an annotation whose severity was not recognised."""
        ...


class LoggingDiagnostics:
    """Report diagnostics as warnings on the module logger."""

    def malformed_annotation(self, record_id: int, keys: Sequence[str]) -> None:
        logger.warning(
            "Record %s has annotations for unknown fields (ignored in cells): %s",
            record_id,
            ", ".join(keys),
        )

    def unknown_severity(self, record_id: int, field_name: str, raw: Optional[str]) -> None:
        logger.warning(
            "Record %s field %s has unrecognised severity %r; using neutral treatment",
            record_id,
            field_name,
            raw,
        )


@dataclass
class CollectingDiagnostics:
    """Keep diagnostics in memory, e.g. for reports and tests."""

    malformed: List[Tuple[int, Tuple[str, ...]]] = field(default_factory=list)
    unknown: List[Tuple[int, str, Optional[str]]] = field(default_factory=list)

    def malformed_annotation(self, record_id: int, keys: Sequence[str]) -> None:
        self.malformed.append((record_id, tuple(keys)))

    def unknown_severity(self, record_id: int, field_name: str, raw: Optional[str]) -> None:
        self.unknown.append((record_id, field_name, raw))

    def __len__(self) -> int:
        return len(self.malformed) + len(self.unknown)


__all__ = ["Diagnostics", "LoggingDiagnostics", "CollectingDiagnostics"]
