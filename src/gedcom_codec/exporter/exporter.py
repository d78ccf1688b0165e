"""
exporter.py
File-level export entry points.

    export_to_file(individuals, families, output_path)
    export_result_to_json(result, output_path)

GEDCOM text is built in memory first, so a failed serialization never
leaves a partial file behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from gedcom_codec.entities.models import Family, Individual, ParseResult
from gedcom_codec.logging import get_logger

from .gedcom_writer import GedcomWriter
from .json_exporter import export_result_json

log = get_logger("exporter")


def export_to_file(
    individuals: Iterable[Individual],
    families: Iterable[Family],
    output_path: Union[str, Path],
    writer: Optional[GedcomWriter] = None,
) -> Path:
    """
    Serialize entities and write them to ``output_path`` as UTF-8.

    Raises:
        SerializationError: the entities cannot be written; no file is created.
    """
    output_path = Path(output_path)
    writer = writer or GedcomWriter()

    text = writer.serialize(individuals, families)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the configured line terminator as-is.
    with output_path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)

    log.info("GEDCOM export complete: %s (%d bytes)", output_path, output_path.stat().st_size)
    return output_path


def export_result_to_json(result: ParseResult, output_path: Union[str, Path], indent: int = 2) -> Path:
    output_path = Path(output_path)
    export_result_json(result, output_path, indent=indent)
    return output_path
