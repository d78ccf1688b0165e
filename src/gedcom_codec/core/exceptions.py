from __future__ import annotations

from typing import Optional


class GedcomError(Exception):
    """Base class for hard GEDCOM failures. ``line`` is 1-based, or None."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line


class GedcomStructureError(GedcomError):
    """Raised when the line grammar or the level hierarchy is violated."""


class MalformedLineError(GedcomStructureError, ValueError):
    """A line does not have the ``<level> [<xref>] <tag> [<value>]`` shape."""

    def __init__(self, message: str, line: int, text: str):
        super().__init__(f"Line {line}: {message} -> {text!r}", line=line)
        self.text = text


class InvalidNestingError(GedcomStructureError):
    """A record's level is more than one deeper than its predecessor's."""


class DuplicateXrefError(GedcomStructureError):
    """Two level-0 records define the same cross-reference identifier."""

    def __init__(self, xref: str, line: int, first_line: int):
        super().__init__(
            f"Line {line}: duplicate record id {xref} (first defined on line {first_line})",
            line=line,
        )
        self.xref = xref
        self.first_line = first_line


class UnsupportedCharsetError(GedcomError):
    """The text is not UTF-8: HEAD declares another character set, or the bytes do not decode."""

    def __init__(self, charset: str, line: Optional[int] = None, message: Optional[str] = None):
        super().__init__(
            message or f"Unsupported character set {charset!r}; only UTF-8 is accepted",
            line=line,
        )
        self.charset = charset


class DanglingReferenceError(GedcomError):
    """A pointer names a record that is never defined at level 0."""

    def __init__(self, token: str, referrer: str, tag: str, line: Optional[int] = None):
        where = f"Line {line}: " if line else ""
        super().__init__(
            f"{where}{tag} {token} in record {referrer} points to an undefined record",
            line=line,
        )
        self.token = token
        self.referrer = referrer
        self.tag = tag


class SerializationError(GedcomError):
    """Entities cannot be written as a consistent GEDCOM document."""


class PipelineError(Exception):
    """Base exception for import/export pipeline failures."""


class ImportCommitError(PipelineError):
    """Raised when persisting a parsed import fails; nothing was written."""
