# src/gedcom_codec/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

from gedcom_codec.core.exceptions import MalformedLineError, UnsupportedCharsetError
from gedcom_codec.grammar import TAG_RE, XREF_RE

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")
_BYTE_LINE_BREAK_RE = re.compile(rb"\r\n|\n|\r")


@dataclass(frozen=True)
class Token:
    """
    A single GEDCOM line token.

    Attributes:
        lineno: 1-based line number in the original text.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        pointer: Optional cross-reference identifier, e.g. "@I1@" or None.
        tag: GEDCOM tag, e.g. "INDI", "FAM", "HEAD", "NOTE", "CONC", "CONT".
        value: The raw line value (payload) as a string (may be empty).
        raw: The original line content without trailing newline characters.
    """
    lineno: int
    level: int
    pointer: Optional[str]
    tag: str
    value: str
    raw: str


def _strip_eol(line: str) -> str:
    """Strip trailing CR/LF characters but preserve all other whitespace."""
    return line.rstrip("\r\n")


def tokenize_line(line: str, lineno: int = 0) -> Token:
    """
    Parse a single GEDCOM line into a Token.

    The required order is:
        <level> [<pointer>] <tag> [<value>]

    The pointer is only recognized when the second field is shaped like
    ``@...@``; a value keeps its inner and trailing spaces as written.

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "1 NOTE This is a note"

    Raises:
        MalformedLineError: the line does not follow the grammar.
    """
    raw = _strip_eol(line)

    # Handle optional UTF-8 BOM on the very first line.
    if lineno == 1 and raw.startswith("\ufeff"):
        raw = raw.lstrip("\ufeff")

    text = raw.lstrip(" \t")
    if not text.strip():
        raise MalformedLineError("empty line", lineno, raw)

    # --- 1. Extract level -------------------------------------------------
    parts = text.split(" ", 1)
    if len(parts) == 1:
        raise MalformedLineError("missing tag (only level found)", lineno, raw)

    level_str, rest = parts[0], parts[1]
    if not level_str.isdigit():
        raise MalformedLineError(f"level is not numeric ({level_str!r})", lineno, raw)

    level = int(level_str)
    rest = rest.lstrip(" ")

    if not rest:
        raise MalformedLineError("missing tag after level", lineno, raw)

    # --- 2. Extract optional pointer -------------------------------------
    pointer: Optional[str] = None

    first, _, remainder = rest.partition(" ")
    if XREF_RE.match(first):
        pointer = first
        rest = remainder.lstrip(" ")
        if not rest:
            raise MalformedLineError("pointer present but missing tag", lineno, raw)

    # --- 3. Extract tag and optional value --------------------------------
    tag, _, value = rest.partition(" ")

    if not TAG_RE.match(tag):
        raise MalformedLineError(f"invalid tag {tag!r}", lineno, raw)

    return Token(
        lineno=lineno,
        level=level,
        pointer=pointer,
        tag=tag.upper(),
        value=value,
        raw=raw,
    )


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (lineno, line) for every non-blank line of ``text``."""
    for lineno, raw_line in enumerate(_LINE_BREAK_RE.split(text), start=1):
        if lineno == 1:
            raw_line = raw_line.lstrip("\ufeff")
        if not raw_line.strip():
            # Blank lines are not meaningful in GEDCOM but still count.
            continue
        yield lineno, raw_line


def tokenize_text(text: str) -> Iterator[Token]:
    """
    Yield Token objects for every non-blank line of GEDCOM text.

    Raises:
        MalformedLineError: on the first line that is syntactically invalid.
    """
    for lineno, line in iter_lines(text):
        yield tokenize_line(line, lineno=lineno)


def tokenize_collect(text: str, limit: int) -> tuple[List[Token], List[MalformedLineError]]:
    """
    Tokenize the whole text, collecting up to ``limit`` malformed lines
    instead of stopping at the first one.
    """
    tokens: List[Token] = []
    errors: List[MalformedLineError] = []

    for lineno, line in iter_lines(text):
        try:
            tokens.append(tokenize_line(line, lineno=lineno))
        except MalformedLineError as exc:
            if len(errors) < limit:
                errors.append(exc)

    return tokens, errors


def decode_gedcom_bytes(data: bytes) -> str:
    """
    Decode GEDCOM bytes as UTF-8, dropping a leading BOM.

    Raises:
        UnsupportedCharsetError: the bytes are not valid UTF-8; the error
            names the line holding the first bad byte.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        # exc.object is the input without any BOM, so offsets refer to it.
        line = len(_BYTE_LINE_BREAK_RE.findall(exc.object, 0, exc.start)) + 1
        raise UnsupportedCharsetError(
            "UTF-8",
            line=line,
            message=f"Line {line}: byte 0x{exc.object[exc.start]:02X} is not valid UTF-8; re-encode the file as UTF-8",
        ) from exc


def read_gedcom_file(path: Union[str, Path]) -> str:
    """
    Read a GEDCOM file as UTF-8 text.

    Raises:
        FileNotFoundError: if `path` does not exist.
        UnsupportedCharsetError: the file is not valid UTF-8.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    return decode_gedcom_bytes(file_path.read_bytes())


def tokenize_file(path: Union[str, Path]) -> Iterator[Token]:
    """Yield Token objects for every non-empty GEDCOM line in the given file."""
    yield from tokenize_text(read_gedcom_file(path))
