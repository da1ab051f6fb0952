"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Severity of a field-level annotation.

    Values are strings to ease serialization and CLI interchange. The set is
    closed: any severity the upstream validator sends that is not listed here
    parses to UNKNOWN instead of failing.
    """

    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Severity":
        """Map a raw severity string onto the closed set.

        Examples:
            >>> Severity.parse("Warning ")
            <Severity.WARNING: 'warning'>
            >>> Severity.parse("banana")
            <Severity.UNKNOWN: 'unknown'>
        """
        if not isinstance(raw, str):
            return cls.UNKNOWN
        normalized = raw.strip().lower()
        for member in (cls.WARNING, cls.CRITICAL):
            if member.value == normalized:
                return member
        return cls.UNKNOWN


class Treatment(str, Enum):
    """Visual treatment assigned to a rendered cell."""

    VALID = "valid"
    WARNING = "warning"
    CRITICAL = "critical"
    NEUTRAL = "neutral"


class DisplayField(str, Enum):
    """Record fields shown as table columns, in column order.

    `id` and `errors` are bookkeeping and deliberately absent.
    """

    NAME = "name"
    EMAIL = "email"
    STREET = "street"
    CITY = "city"
    ZIPCODE = "zipcode"
    PHONE = "phone"
    STATUS = "status"


__all__ = ["Severity", "Treatment", "DisplayField"]
