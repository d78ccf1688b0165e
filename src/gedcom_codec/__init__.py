"""
gedcom_codec: GEDCOM 5.5.1 reader and writer.

    from gedcom_codec import parse, serialize

    result = parse(text)
    text_again = serialize(result.individuals, result.families)
"""

from __future__ import annotations

from gedcom_codec.core.exceptions import (
    DanglingReferenceError,
    DuplicateXrefError,
    GedcomError,
    InvalidNestingError,
    MalformedLineError,
    SerializationError,
    UnsupportedCharsetError,
)
from gedcom_codec.dates import GedcomDate, parse_date
from gedcom_codec.entities import Family, Individual, Issue, ParseResult, ValidationReport
from gedcom_codec.exporter import GedcomWriter, serialize
from gedcom_codec.parser_core import GedcomReader, parse, validate

__version__ = "0.1.0"

__all__ = [
    "DanglingReferenceError",
    "DuplicateXrefError",
    "Family",
    "GedcomDate",
    "GedcomError",
    "GedcomReader",
    "GedcomWriter",
    "Individual",
    "InvalidNestingError",
    "Issue",
    "MalformedLineError",
    "ParseResult",
    "SerializationError",
    "UnsupportedCharsetError",
    "ValidationReport",
    "parse",
    "parse_date",
    "serialize",
    "validate",
]
