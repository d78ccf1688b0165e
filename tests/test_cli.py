# tests/test_cli.py

from __future__ import annotations

import json

from typer.testing import CliRunner

from gedcom_codec.cli import app
from gedcom_codec.utils import mock_file_path

runner = CliRunner()


def _run(*args):
    return runner.invoke(app, [str(a) for a in args])


def test_validate_ready_file():
    result = _run("validate", mock_file_path("two_generations.ged"))
    assert result.exit_code == 0
    assert "Ready to import" in result.output


def test_validate_json_report():
    result = _run("validate", mock_file_path("two_generations.ged"), "--json")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["peopleCount"] == 5
    assert data["ready"] is True


def test_validate_failing_file_exits_1():
    result = _run("validate", mock_file_path("dangling_reference.ged"))
    assert result.exit_code == 1
    assert "Not ready" in result.output


def test_validate_missing_file_is_usage_error():
    result = _run("validate", mock_file_path("does_not_exist.ged"))
    assert result.exit_code == 2


def test_stats():
    result = _run("stats", mock_file_path("remarriage.ged"))
    assert result.exit_code == 0
    assert "Individuals" in result.output
    assert "Divorced" in result.output


def test_convert_to_stdout():
    result = _run("convert", mock_file_path("deceased_occupation.ged"))
    assert result.exit_code == 0
    assert result.stdout.startswith("0 HEAD\n")
    assert "1 OCCU Schoolteacher" in result.stdout
    assert result.stdout.endswith("0 TRLR\n")


def test_convert_to_file(tmp_path):
    out = tmp_path / "out.ged"
    result = _run("convert", mock_file_path("two_generations.ged"), "--out", out)
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").count(" INDI\n") == 5


def test_convert_reports_parse_error():
    result = _run("convert", mock_file_path("malformed_line.ged"))
    assert result.exit_code == 1
    assert "Line 5" in result.output


def test_validate_rejects_bytes_that_are_not_utf8():
    result = _run("validate", mock_file_path("latin1_bytes.ged"))
    assert result.exit_code == 1
    assert "Line 8" in result.output


def test_export_json(tmp_path):
    out = tmp_path / "out.json"
    result = _run("export-json", mock_file_path("two_generations.ged"), "--out", out, "--pretty")
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert len(data["individuals"]) == 5


def test_roundtrip_command():
    result = _run("roundtrip", mock_file_path("continuation_notes.ged"))
    assert result.exit_code == 0
    assert "Round trip OK" in result.output
