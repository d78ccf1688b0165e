# src/gedcom_codec/grammar.py

"""
Shared GEDCOM 5.5.1 vocabulary used by both the reader and the writer.

Keeping the tag <-> field table in one place is what lets the writer emit
exactly the structures the reader maps back, so a round trip is lossless.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Record-level tags
# ---------------------------------------------------------------------------

HEAD = "HEAD"
TRLR = "TRLR"
INDI = "INDI"
FAM = "FAM"
NOTE = "NOTE"

CONT = "CONT"
CONC = "CONC"
CONTINUATION_TAGS = {CONT, CONC}

# Level-0 records the reader maps; anything else is reported and skipped.
KNOWN_RECORD_TAGS = {HEAD, TRLR, INDI, FAM, NOTE}

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

GEDCOM_VERSION = "5.5.1"
GEDCOM_7_VERSION = "7.0"
# Versions the writer can emit; 7.0 output carries ISO 8601 dates.
GEDCOM_VERSIONS = (GEDCOM_VERSION, GEDCOM_7_VERSION)
# Version prefixes the reader accepts without a warning.
READABLE_VERSION_PREFIXES = ("5.5", "7.")
GEDCOM_FORM = "LINEAGE-LINKED"
SUPPORTED_CHARSET = "UTF-8"

# ---------------------------------------------------------------------------
# Line grammar
# ---------------------------------------------------------------------------

XREF_RE = re.compile(r"^@[^@\s]+@$")
TAG_RE = re.compile(r"^[A-Za-z0-9_]+$")

# ---------------------------------------------------------------------------
# Individual / family mapping table
# ---------------------------------------------------------------------------

SEX_CODES = {"M", "F", "U"}
DEFAULT_SEX = "U"

# Event tag -> (date field, place field). A None place field means the
# event's PLAC is not modeled.
INDIVIDUAL_EVENTS: Dict[str, Tuple[str, str]] = {
    "BIRT": ("birth_date", "birth_place"),
    "DEAT": ("death_date", "death_place"),
}

FAMILY_EVENTS: Dict[str, Tuple[str, str | None]] = {
    "MARR": ("marriage_date", "marriage_place"),
    "DIV": ("divorce_date", None),
}

# Spouse slot filled first for a person of the given sex.
SPOUSE_SLOT_BY_SEX = {"M": "husband", "F": "wife"}

INDIVIDUAL_TAGS = {"NAME", "SEX", "OCCU", NOTE, "FAMC", "FAMS", *INDIVIDUAL_EVENTS}
FAMILY_TAGS = {"HUSB", "WIFE", "CHIL", NOTE, *FAMILY_EVENTS}

# Cross-reference prefixes used by the writer.
INDIVIDUAL_PREFIX = "I"
FAMILY_PREFIX = "F"

# GEDCOM 5.5.1 caps a physical line at 255 characters.
MAX_LINE_LENGTH = 255

# Value of an event line that asserts the event happened with no details.
EVENT_ASSERTED = "Y"

# Multiple NOTE substructures are merged into one text with this separator.
NOTE_SEPARATOR = "\n\n"
