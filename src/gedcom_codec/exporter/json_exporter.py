"""
json_exporter.py
Structured JSON exporter for parse results.

This exporter:
- Converts entities and reports to dictionaries (NOT strings)
- Renders dates in their GEDCOM form, plus an ISO form when simple
- Is deterministic: keys follow field order, entities follow input order
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict

from gedcom_codec.dates import GedcomDate
from gedcom_codec.entities.models import ParseResult
from gedcom_codec.logging import get_logger

log = get_logger("json_exporter")


def _date_to_json(date: GedcomDate) -> Dict[str, Any]:
    return {
        "gedcom": date.to_gedcom(),
        "iso": date.isoformat(),
        "qualifier": date.qualifier,
        "recognized": date.recognized,
    }


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - GedcomDate -> {gedcom, iso, qualifier, recognized}
    - dataclasses -> dict (recursively, field by field)
    - dict -> dict (recursively)
    - list / tuple / set -> list (recursively)
    - Unknown objects -> str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, GedcomDate):
        return _date_to_json(obj)

    if is_dataclass(obj):
        return {f.name: _to_json_compatible(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [_to_json_compatible(v) for v in obj]

    if isinstance(obj, set):
        return [_to_json_compatible(v) for v in sorted(obj, key=str)]

    return str(obj)


def build_result_dict(result: ParseResult) -> Dict[str, Any]:
    """Convert a ParseResult into a JSON-safe dict keyed by xref."""
    return {
        "header": _to_json_compatible(result.header),
        "incomplete": result.incomplete,
        "individuals": {
            ind.xref: _to_json_compatible(ind) for ind in result.individuals
        },
        "families": {
            fam.xref: _to_json_compatible(fam) for fam in result.families
        },
        "warnings": [w.to_dict() for w in result.warnings],
    }


def serialize_result_to_json_string(result: ParseResult, indent: int = 2) -> str:
    return json.dumps(
        build_result_dict(result),
        indent=indent,
        ensure_ascii=False,
    )


def export_result_json(result: ParseResult, output_path: str | Path, indent: int = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting parse result JSON to: %s (INDI=%d, FAM=%d, warnings=%d)",
        output_path,
        len(result.individuals),
        len(result.families),
        len(result.warnings),
    )

    json_str = serialize_result_to_json_string(result, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
