"""Tests for loading review settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from data_review.core.schemas import DISPLAY_FIELDS
from data_review.sources.settings import ReviewSettings, load_settings


def test_load_full_config(tmp_path):
    config = tmp_path / "review.yaml"
    config.write_text(
        """
fetch:
  source: "https://example.test/api/data"
  timeout: 5
table:
  title: "Customer Review"
  fields: [name, status]
export:
  root: "out"
  basename: "customers"
""",
        encoding="utf-8",
    )

    settings = load_settings(config)

    assert settings == ReviewSettings(
        source="https://example.test/api/data",
        timeout=5.0,
        export_root=Path("out"),
        export_basename="customers",
        title="Customer Review",
        fields=("name", "status"),
    )


def test_defaults_for_missing_keys(tmp_path):
    config = tmp_path / "review.yaml"
    config.write_text("fetch:\n  source: other.json\n", encoding="utf-8")

    settings = load_settings(config)

    assert settings.source == "other.json"
    assert settings.fields == DISPLAY_FIELDS
    assert settings.export_basename == "records"


def test_unknown_fields_rejected(tmp_path):
    config = tmp_path / "review.yaml"
    config.write_text("table:\n  fields: [name, errors]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="errors"):
        load_settings(config)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yaml")


def test_non_mapping_yaml(tmp_path):
    config = tmp_path / "review.yaml"
    config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(config)


def test_no_config_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_settings() == ReviewSettings()


def test_repository_config_is_valid():
    config = Path(__file__).resolve().parents[2] / "config" / "review.yaml"
    settings = load_settings(config)
    assert settings.fields == DISPLAY_FIELDS
