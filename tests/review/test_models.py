"""Tests for the error annotation model."""

from __future__ import annotations

import pytest

from data_review.core.enums import Severity
from data_review.review.models import (
    FieldError,
    Record,
    RecordSet,
    annotation_frame,
    has_annotation,
    summarize_annotations,
)


class TestRecordFromDict:
    def test_parses_fields_and_errors(self, sample_payload):
        record = Record.from_dict(sample_payload["records"][0])

        assert record.id == 1
        assert record.name == "Jo, Ann"
        assert record.errors["email"] == FieldError(message="bad domain", severity_raw="warning")
        assert record.errors["email"].severity is Severity.WARNING

    def test_missing_display_fields_default_to_empty(self):
        record = Record.from_dict({"id": 7, "name": "Solo"})

        assert record.email == ""
        assert record.status == ""
        assert dict(record.errors) == {}

    def test_null_errors_treated_as_empty(self):
        record = Record.from_dict({"id": 7, "errors": None})
        assert dict(record.errors) == {}

    def test_extra_keys_kept_in_payload_order(self):
        record = Record.from_dict({"id": 1, "zeta": 1, "name": "A", "alpha": 2})
        assert list(record.extras) == ["zeta", "alpha"]
        assert record.value("alpha") == 2

    @pytest.mark.parametrize("bad_id", ["1", None, 1.5, True])
    def test_non_integer_id_rejected(self, bad_id):
        with pytest.raises(ValueError, match="integer"):
            Record.from_dict({"id": bad_id})

    def test_errors_must_be_mapping(self):
        with pytest.raises(ValueError, match="errors must be an object"):
            Record.from_dict({"id": 1, "errors": ["email"]})

    def test_error_entry_must_be_mapping(self):
        with pytest.raises(ValueError, match="Field error"):
            Record.from_dict({"id": 1, "errors": {"email": "bad"}})

    @pytest.mark.parametrize("value", [{"message": "bad", "severity": "critical"}, ["a", "b"]])
    def test_non_scalar_display_value_rejected(self, value):
        with pytest.raises(ValueError, match="field 'name' must be a scalar"):
            Record.from_dict({"id": 1, "name": value})

    def test_scalar_display_values_accepted(self):
        record = Record.from_dict({"id": 1, "zipcode": 12345, "status": True, "phone": None})
        assert (record.zipcode, record.status, record.phone) == (12345, True, None)

    def test_field_order_follows_payload(self):
        record = Record.from_dict({"name": "A", "errors": {}, "id": 1, "note": "x"})
        assert record.field_order == ("name", "id", "note")

    def test_errors_are_read_only(self, sample_records):
        with pytest.raises(TypeError):
            sample_records[0].errors["name"] = FieldError("x", "warning")  # type: ignore[index]


class TestRecordAccess:
    def test_value_refuses_error_map(self, sample_records):
        with pytest.raises(KeyError):
            sample_records[0].value("errors")

    def test_malformed_annotation_keys(self):
        record = Record.from_dict(
            {
                "id": 1,
                "errors": {
                    "nickname": {"message": "m", "severity": "warning"},
                    "email": {"message": "m", "severity": "warning"},
                    "age": {"message": "m", "severity": "critical"},
                },
            }
        )
        assert record.malformed_annotation_keys() == ["age", "nickname"]

    def test_has_annotation(self, sample_records):
        first = sample_records[0]
        assert has_annotation(first, "email") is True
        assert has_annotation(first, "name") is False
        assert has_annotation(sample_records[1], "email") is False


class TestRecordSet:
    def test_preserves_payload_order(self, sample_records):
        assert sample_records.ids() == [1, 2, 3]
        assert [r.name for r in sample_records] == ["Jo, Ann", "Bo Lee", "Cy Park"]

    def test_get_by_id(self, sample_records):
        assert sample_records.get(2).name == "Bo Lee"
        assert sample_records.get(99) is None

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate record id: 1"):
            RecordSet.from_payload({"records": [{"id": 1}, {"id": 1}]})

    @pytest.mark.parametrize("payload", [{}, {"records": {}}, [], {"data": []}])
    def test_malformed_payload_rejected(self, payload):
        with pytest.raises(ValueError):
            RecordSet.from_payload(payload)

    def test_empty(self):
        assert len(RecordSet.empty()) == 0
        assert RecordSet.from_payload({"records": []}).ids() == []


class TestAnnotationFrames:
    def test_annotation_frame_rows(self, sample_records):
        frame = annotation_frame(sample_records)

        assert len(frame) == 4
        assert frame["record_id"].tolist() == [1, 3, 3, 3]
        zipcode = frame[frame["field"] == "zipcode"].iloc[0]
        assert zipcode["severity"] == "unknown"
        assert zipcode["message"] == "zipcode must be numeric"
        assert bool(zipcode["known_field"]) is True

    def test_summary_counts(self, sample_records):
        counts = summarize_annotations(sample_records)

        assert counts.index.tolist() == ["email", "zipcode", "phone"]
        assert counts.loc["email", "warning"] == 1
        assert counts.loc["email", "critical"] == 1
        assert counts.loc["email", "total"] == 2
        assert counts.loc["zipcode", "unknown"] == 1
        assert counts.loc["phone", "critical"] == 1
        assert counts["total"].sum() == 4

    def test_summary_unknown_fields_last(self):
        records = RecordSet.from_payload(
            {
                "records": [
                    {
                        "id": 1,
                        "errors": {
                            "nickname": {"message": "m", "severity": "warning"},
                            "status": {"message": "m", "severity": "warning"},
                        },
                    }
                ]
            }
        )
        assert summarize_annotations(records).index.tolist() == ["status", "nickname"]

    def test_summary_empty(self):
        counts = summarize_annotations(RecordSet.empty())
        assert counts.empty
        assert "total" in counts.columns
