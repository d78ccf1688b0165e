# tests/test_json_exporter.py

from __future__ import annotations

import json

from gedcom_codec.exporter import build_result_dict, export_result_to_json
from gedcom_codec.parser_core import GedcomReader

from conftest import make_config


def _result(mock_text, name="two_generations.ged"):
    return GedcomReader(make_config()).parse(mock_text(name))


def test_result_dict_is_keyed_by_xref(mock_text):
    data = build_result_dict(_result(mock_text))

    assert list(data["individuals"]) == ["@I1@", "@I2@", "@I3@", "@I4@", "@I5@"]
    assert list(data["families"]) == ["@F1@", "@F2@"]
    assert data["incomplete"] is False
    assert data["header"]["charset"] == "UTF-8"


def test_dates_are_rendered(mock_text):
    john = build_result_dict(_result(mock_text))["individuals"]["@I1@"]

    assert john["birth_date"] == {
        "gedcom": "12 MAR 1920",
        "iso": "1920-03-12",
        "qualifier": None,
        "recognized": True,
    }
    assert john["spouse_in_families"] == ["@F1@"]
    assert john["living"] is False


def test_export_writes_valid_json(tmp_path, mock_text):
    out = export_result_to_json(_result(mock_text, "truncated.ged"), tmp_path / "nested" / "out.json")

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["incomplete"] is True
    assert data["warnings"][0]["message"]
