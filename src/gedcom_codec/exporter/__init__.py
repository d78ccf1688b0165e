"""
Exporter package.

Re-exports the GEDCOM writer and the file / JSON export entry points.
"""

from __future__ import annotations

from .exporter import export_result_to_json, export_to_file
from .gedcom_writer import GedcomWriter, format_line, serialize, split_long_text
from .json_exporter import build_result_dict, serialize_result_to_json_string

__all__ = [
    "GedcomWriter",
    "build_result_dict",
    "export_result_to_json",
    "export_to_file",
    "format_line",
    "serialize",
    "serialize_result_to_json_string",
    "split_long_text",
]
