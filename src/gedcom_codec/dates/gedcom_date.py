# src/gedcom_codec/dates/gedcom_date.py

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Month and qualifier helpers
# ---------------------------------------------------------------------------

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "SEPT": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

MONTH_ABBREVIATIONS = [
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
]

# Single-date qualifiers defined by GEDCOM 5.5.1.
QUALIFIERS = {"ABT", "CAL", "EST", "BEF", "AFT", "INT"}

# Range / period forms. Valid GEDCOM, kept verbatim.
_RANGE_RE = re.compile(
    r"^(BET\s+.+\s+AND\s+.+|FROM\s+.+\s+TO\s+.+|FROM\s+.+|TO\s+.+)$",
    re.IGNORECASE,
)

_YEAR_RE = re.compile(r"^\d{1,4}$")
_DAY_RE = re.compile(r"^\d{1,2}$")

# GEDCOM 7.0 files written by other tools carry ISO 8601 calendar dates.
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?$")


@dataclass(frozen=True)
class GedcomDate:
    """
    A GEDCOM date as written in the file.

    Simple dates (``D MON YYYY``, ``MON YYYY``, ``YYYY``, optionally with a
    qualifier such as ``ABT``) are decomposed into year/month/day. Anything
    else is retained verbatim in ``text``; ``recognized`` tells the two
    apart for reporting.

    Attributes:
        year, month, day: Components of a simple date (partial allowed).
        qualifier: ABT, CAL, EST, BEF, AFT or INT, if present.
        text: Verbatim text for non-simple dates.
        recognized: False when the text matched no GEDCOM date form.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    qualifier: Optional[str] = None
    text: Optional[str] = None
    recognized: bool = True

    @property
    def is_simple(self) -> bool:
        return self.text is None and self.year is not None

    @property
    def precision(self) -> Optional[str]:
        if not self.is_simple:
            return None
        if self.day is not None:
            return "day"
        if self.month is not None:
            return "month"
        return "year"

    def to_gedcom(self, iso: bool = False) -> str:
        """
        Render the date in GEDCOM 5.5.1 form, or with the calendar part in
        ISO 8601 form (``ABT 1985-01``) when ``iso`` is set.
        """
        if not self.is_simple:
            return self.text or ""

        parts = []
        if self.qualifier:
            parts.append(self.qualifier)
        if iso:
            parts.append(self.isoformat())
            return " ".join(parts)
        if self.day is not None:
            parts.append(str(self.day))
        if self.month is not None:
            parts.append(MONTH_ABBREVIATIONS[self.month - 1])
        parts.append(str(self.year))
        return " ".join(parts)

    def isoformat(self) -> Optional[str]:
        """``YYYY-MM-DD`` / ``YYYY-MM`` / ``YYYY``; None for non-simple dates."""
        if not self.is_simple:
            return None
        out = f"{self.year:04d}"
        if self.month is not None:
            out += f"-{self.month:02d}"
            if self.day is not None:
                out += f"-{self.day:02d}"
        return out

    def __str__(self) -> str:
        return self.to_gedcom()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _split_qualifier(tokens: list[str]) -> Tuple[Optional[str], list[str]]:
    if tokens and tokens[0].upper().rstrip(".") in QUALIFIERS:
        return tokens[0].upper().rstrip("."), tokens[1:]
    return None, tokens


def _valid_day(year: int, month: int, day: int) -> bool:
    if year < 1:
        return False
    _, days_in_month = calendar.monthrange(year, month)
    return 1 <= day <= days_in_month


def _parse_iso(token: str) -> Optional[Tuple[int, Optional[int], Optional[int]]]:
    match = _ISO_RE.match(token)
    if match is None:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    if match.group(3) is None:
        return year, month, None
    day = int(match.group(3))
    if not _valid_day(year, month, day):
        return None
    return year, month, day


def _parse_simple(tokens: list[str]) -> Optional[Tuple[int, Optional[int], Optional[int]]]:
    """Return (year, month, day) for a qualifier-free simple date, else None."""
    if len(tokens) == 1:
        if _YEAR_RE.match(tokens[0]):
            return int(tokens[0]), None, None
        return _parse_iso(tokens[0])

    if len(tokens) == 2:
        month = MONTHS.get(tokens[0].upper())
        if month is None or not _YEAR_RE.match(tokens[1]):
            return None
        return int(tokens[1]), month, None

    if len(tokens) == 3:
        if not _DAY_RE.match(tokens[0]) or not _YEAR_RE.match(tokens[2]):
            return None
        month = MONTHS.get(tokens[1].upper())
        if month is None:
            return None
        year, day = int(tokens[2]), int(tokens[0])
        if not _valid_day(year, month, day):
            return None
        return year, month, day

    return None


def parse_date(raw: Optional[str]) -> Optional[GedcomDate]:
    """
    Parse GEDCOM date text.

    Returns None for empty input. Never raises: text that is not a simple
    date is kept verbatim (edges trimmed), with ``recognized=False`` when it
    is not a GEDCOM range form either.

    Examples:
        "15 JAN 1985"  -> GedcomDate(1985, 1, 15)
        "jan 1985"     -> GedcomDate(1985, 1)
        "1985-01-15"   -> GedcomDate(1985, 1, 15)
        "ABT 1900"     -> GedcomDate(1900, qualifier="ABT")
        "BET 1975 AND 1985" -> GedcomDate(text="BET 1975 AND 1985")
        "Unknown"      -> GedcomDate(text="Unknown", recognized=False)
    """
    if raw is None:
        return None

    text = raw.strip()
    if not text:
        return None

    qualifier, rest = _split_qualifier(text.split())
    parsed = _parse_simple(rest)
    if parsed is not None:
        year, month, day = parsed
        return GedcomDate(year=year, month=month, day=day, qualifier=qualifier)

    return GedcomDate(text=text, recognized=bool(_RANGE_RE.match(text)))
