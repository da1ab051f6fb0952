"""Shared pytest fixtures for review tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from data_review.review.models import RecordSet


SAMPLE_PAYLOAD: Dict[str, Any] = {
    "records": [
        {
            "id": 1,
            "name": "Jo, Ann",
            "email": "a@b.com",
            "street": '12 "Old" Mill Rd',
            "city": "Springfield",
            "zipcode": "12345",
            "phone": "555-0100",
            "status": "active",
            "errors": {"email": {"message": "bad domain", "severity": "warning"}},
        },
        {
            "id": 2,
            "name": "Bo Lee",
            "email": "bo@example.org",
            "street": "4 Elm St",
            "city": "Shelbyville",
            "zipcode": "54321",
            "phone": "555-0199",
            "status": "active",
            "errors": {},
        },
        {
            "id": 3,
            "name": "Cy Park",
            "email": "cy@example",
            "street": "9 Oak Ave",
            "city": "Ogdenville",
            "zipcode": "ABCDE",
            "phone": "",
            "status": "inactive",
            "errors": {
                "zipcode": {"message": "zipcode must be numeric", "severity": "banana"},
                "email": {"message": "missing top-level domain", "severity": "critical"},
                "phone": {"message": "phone is required", "severity": "critical"},
            },
        },
    ]
}


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    """A fresh copy of the three-record payload."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def sample_records(sample_payload) -> RecordSet:  # pylint: disable=redefined-outer-name
    return RecordSet.from_payload(sample_payload)


@pytest.fixture
def payload_file(tmp_path: Path, sample_payload) -> Path:  # pylint: disable=redefined-outer-name
    """Sample payload written as a JSON file."""
    path = tmp_path / "records.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path
