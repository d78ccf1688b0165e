"""
gedcom_writer.py
GEDCOM serializer for Individual / Family entities.

The writer mirrors the reader's mapping table (gedcom_codec.grammar), so
that parsing its output gives back the same entities. Output is fully
deterministic: tokens follow the iteration order of the inputs and the
header carries no timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from gedcom_codec.config import get_config
from gedcom_codec.core.exceptions import SerializationError
from gedcom_codec.dates import GedcomDate
from gedcom_codec.entities.models import Family, Individual
from gedcom_codec.grammar import (
    CONC,
    CONT,
    DEFAULT_SEX,
    EVENT_ASSERTED,
    FAMILY_PREFIX,
    GEDCOM_7_VERSION,
    GEDCOM_FORM,
    GEDCOM_VERSION,
    GEDCOM_VERSIONS,
    INDIVIDUAL_EVENTS,
    INDIVIDUAL_PREFIX,
    MAX_LINE_LENGTH,
    SEX_CODES,
    SPOUSE_SLOT_BY_SEX,
    SUPPORTED_CHARSET,
    TRLR,
)
from gedcom_codec.identity import XrefTable, is_pointer
from gedcom_codec.logging import get_logger

# Shortest line body we are willing to produce when wrapping.
_MIN_CHUNK = 16


def format_line(level: int, tag: str, value: Optional[str] = None, xref: Optional[str] = None) -> str:
    """Format ``<level> [<xref>] <tag> [<value>]``."""
    line = f"{level}"
    if xref:
        line += f" {xref}"
    line += f" {tag}"
    if value:
        line += f" {value}"
    return line


def split_long_text(text: str, width: int) -> List[str]:
    """
    Split one physical line into chunks of at most ``width`` characters.

    Cuts are moved back so no chunk ends with, and no following chunk
    starts with, a space; some readers trim those.
    """
    chunks: List[str] = []
    rest = text
    while len(rest) > width:
        cut = width
        while cut > _MIN_CHUNK and (rest[cut - 1] == " " or rest[cut] == " "):
            cut -= 1
        if cut <= _MIN_CHUNK:
            cut = width
        chunks.append(rest[:cut])
        rest = rest[cut:]
    chunks.append(rest)
    return chunks


@dataclass
class _Members:
    """Membership of one family as it will be written."""

    husband: Optional[str]
    wife: Optional[str]
    children: List[str]

    @property
    def spouses(self) -> List[str]:
        return [p for p in (self.husband, self.wife) if p]


class GedcomWriter:
    """
    Serialize entities to GEDCOM text.

    ``serialize`` either returns a complete document or raises
    SerializationError; it never returns partial output.
    """

    def __init__(self, config=None):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger(__name__)

        writer_cfg = self.cfg.writer
        self.source_program = str(writer_cfg.get("source_program", "gedcom_codec"))
        self.max_line_length = min(int(writer_cfg.get("max_line_length", MAX_LINE_LENGTH)), MAX_LINE_LENGTH)
        self.line_terminator = str(writer_cfg.get("line_terminator", "\n"))
        self.version = str(writer_cfg.get("version", GEDCOM_VERSION))

        if self.max_line_length < 40:
            raise ValueError(f"writer.max_line_length too small: {self.max_line_length}")
        if self.version not in GEDCOM_VERSIONS:
            raise ValueError(f"writer.version must be one of {GEDCOM_VERSIONS}, got {self.version!r}")
        self.iso_dates = self.version == GEDCOM_7_VERSION

    # ---------------------------------------------------------
    # Public API
    # ---------------------------------------------------------
    def serialize(self, individuals: Iterable[Individual], families: Iterable[Family]) -> str:
        individuals = list(individuals)
        families = list(families)

        table = self._assign_xrefs(individuals, families)
        members = self._memberships(individuals, families)
        child_links, spouse_links = self._links_by_person(families, members, table)

        lines: List[str] = []
        lines.extend(self._header())
        for person in individuals:
            lines.extend(self._individual(person, table, child_links, spouse_links))
        for family in families:
            lines.extend(self._family(family, members[family.key], table))
        lines.append(format_line(0, TRLR))

        self.log.info(
            "Serialized %d individuals and %d families as GEDCOM %s (%d lines)",
            len(individuals),
            len(families),
            self.version,
            len(lines),
        )
        return self.line_terminator.join(lines) + self.line_terminator

    # ---------------------------------------------------------
    # Cross-references
    # ---------------------------------------------------------
    def _assign_xrefs(self, individuals: Sequence[Individual], families: Sequence[Family]) -> XrefTable:
        table = XrefTable()
        for kind, prefix, entities in (
            ("individual", INDIVIDUAL_PREFIX, individuals),
            ("family", FAMILY_PREFIX, families),
        ):
            for entity in entities:
                key = entity.key
                if key is None:
                    raise SerializationError(f"{kind} has neither an id nor an xref: {entity!r}")
                if table.lookup(prefix, key) is not None:
                    raise SerializationError(f"{kind} {key} supplied more than once")
                table.assign(prefix, key)
        return table

    def _memberships(self, individuals: Sequence[Individual], families: Sequence[Family]) -> Dict[str, _Members]:
        """
        Family membership to write: each family's own links, plus the
        person-side links (``child_of_family``, ``spouse_in_families``) the
        family does not list. A spouse link fills the slot matching the
        person's sex, else the free one.

        Raises:
            SerializationError: a person-side link names an unknown family,
                or cannot be added without a third spouse or a person who
                is both spouse and child of one family.
        """
        members = {f.key: _Members(f.husband, f.wife, list(f.children)) for f in families}

        for person in individuals:
            if person.child_of_family is not None:
                family = self._linked_family(members, person, person.child_of_family, "FAMC")
                if person.key in family.spouses:
                    raise SerializationError(
                        f"{person.key} is both spouse and child of family {person.child_of_family}"
                    )
                if person.key not in family.children:
                    family.children.append(person.key)

            for family_key in person.spouse_in_families:
                family = self._linked_family(members, person, family_key, "FAMS")
                if person.key in family.spouses:
                    continue
                if person.key in family.children:
                    raise SerializationError(f"{person.key} is both spouse and child of family {family_key}")

                preferred = SPOUSE_SLOT_BY_SEX.get(self._sex(person))
                slots = [preferred] if preferred else []
                slots += [s for s in ("husband", "wife") if s != preferred]
                free = [s for s in slots if getattr(family, s) is None]
                if not free:
                    raise SerializationError(
                        f"{person.key} lists family {family_key}, which already has two spouses"
                    )
                setattr(family, free[0], person.key)

        return members

    @staticmethod
    def _linked_family(members: Dict[str, _Members], person: Individual, family_key: str, tag: str) -> _Members:
        family = members.get(family_key)
        if family is None:
            raise SerializationError(f"{tag} of {person.key} refers to unknown family {family_key}")
        return family

    def _person_token(self, table: XrefTable, key: str, family: Family) -> str:
        token = table.lookup(INDIVIDUAL_PREFIX, key)
        if token is None:
            raise SerializationError(f"Family {family.key} refers to unknown person {key}")
        return token

    def _links_by_person(self, families: Sequence[Family], members: Dict[str, _Members], table: XrefTable):
        """FAMC / FAMS tokens per person key, in family order."""
        child_links: Dict[str, List[str]] = {}
        spouse_links: Dict[str, List[str]] = {}

        for family in families:
            fam_token = table.lookup(FAMILY_PREFIX, family.key)
            written = members[family.key]
            for spouse in written.spouses:
                self._person_token(table, spouse, family)
                spouse_links.setdefault(spouse, []).append(fam_token)
            for child in written.children:
                self._person_token(table, child, family)
                child_links.setdefault(child, []).append(fam_token)

        return child_links, spouse_links

    # ---------------------------------------------------------
    # Records
    # ---------------------------------------------------------
    def _header(self) -> List[str]:
        return [
            format_line(0, "HEAD"),
            format_line(1, "SOUR", self.source_program),
            format_line(1, "GEDC"),
            format_line(2, "VERS", self.version),
            format_line(2, "FORM", GEDCOM_FORM),
            format_line(1, "CHAR", SUPPORTED_CHARSET),
        ]

    def _individual(
        self,
        person: Individual,
        table: XrefTable,
        child_links: Dict[str, List[str]],
        spouse_links: Dict[str, List[str]],
    ) -> List[str]:
        token = table.lookup(INDIVIDUAL_PREFIX, person.key)
        lines = [format_line(0, "INDI", xref=token)]

        name = self._name(person)
        if name:
            lines.extend(self._single_line(1, "NAME", name, person.key))
        else:
            lines.append(format_line(1, "NAME"))
        lines.append(format_line(1, "SEX", self._sex(person)))

        for tag, (date_field, place_field) in INDIVIDUAL_EVENTS.items():
            event = self._event(tag, getattr(person, date_field), getattr(person, place_field), person.key)
            if not event and tag == "DEAT" and not person.living:
                event = [format_line(1, "DEAT", EVENT_ASSERTED)]
            lines.extend(event)

        occupation = (person.occupation or "").strip()
        if occupation:
            lines.extend(self._single_line(1, "OCCU", occupation, person.key))
        if person.notes:
            lines.extend(self._long_text(1, "NOTE", person.notes, person.key))

        for fam_token in child_links.get(person.key, []):
            lines.append(format_line(1, "FAMC", fam_token))
        for fam_token in spouse_links.get(person.key, []):
            lines.append(format_line(1, "FAMS", fam_token))

        return lines

    def _family(self, family: Family, members: _Members, table: XrefTable) -> List[str]:
        token = table.lookup(FAMILY_PREFIX, family.key)
        lines = [format_line(0, "FAM", xref=token)]

        if members.husband:
            lines.append(format_line(1, "HUSB", self._person_token(table, members.husband, family)))
        if members.wife:
            lines.append(format_line(1, "WIFE", self._person_token(table, members.wife, family)))
        for child in members.children:
            lines.append(format_line(1, "CHIL", self._person_token(table, child, family)))

        lines.extend(self._event("MARR", family.marriage_date, family.marriage_place, family.key))
        divorce = self._event("DIV", family.divorce_date, None, family.key)
        if not divorce and family.divorced:
            divorce = [format_line(1, "DIV", EVENT_ASSERTED)]
        lines.extend(divorce)

        if family.notes:
            lines.extend(self._long_text(1, "NOTE", family.notes, family.key))

        return lines

    # ---------------------------------------------------------
    # Values
    # ---------------------------------------------------------
    def _sex(self, person: Individual) -> str:
        code = (person.sex or DEFAULT_SEX).strip().upper()
        if code not in SEX_CODES:
            raise SerializationError(f"SEX of {person.key} must be one of M, F, U: {person.sex!r}")
        return code

    def _name(self, person: Individual) -> Optional[str]:
        given = (person.given_name or "").strip()
        surname = (person.surname or "").strip()
        if "/" in given or "/" in surname:
            raise SerializationError(f"Name of {person.key} contains '/': {given!r} {surname!r}")
        if not surname:
            return given or None
        return f"{given} /{surname}/" if given else f"/{surname}/"

    def _event(self, tag: str, date: Optional[GedcomDate], place: Optional[str], owner: str) -> List[str]:
        date_text = date.to_gedcom(iso=self.iso_dates).strip() if date is not None else ""
        place = (place or "").strip()
        if not date_text and not place:
            return []
        lines = [format_line(1, tag)]
        if date_text:
            lines.extend(self._single_line(2, "DATE", date_text, owner))
        if place:
            lines.extend(self._single_line(2, "PLAC", place, owner))
        return lines

    def _single_line(self, level: int, tag: str, value: str, owner: str) -> List[str]:
        """Emit a one-line value, continued with CONC when it is too long."""
        if "\n" in value or "\r" in value:
            raise SerializationError(f"{tag} of {owner} spans several lines")
        return self._wrapped(level, level, tag, value)

    def _long_text(self, level: int, tag: str, text: str, owner: str) -> List[str]:
        """
        Emit a multi-line value: CONT for each embedded newline, CONC for
        physical lines longer than the configured limit.
        """
        lines: List[str] = []
        physical = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        if is_pointer(physical[0]):
            raise SerializationError(f"{tag} of {owner} would read back as a pointer: {physical[0]!r}")

        for index, part in enumerate(physical):
            if index == 0:
                lines.extend(self._wrapped(level, level, tag, part))
            else:
                lines.extend(self._wrapped(level, level + 1, CONT, part))

        return lines

    def _wrapped(self, level: int, line_level: int, line_tag: str, text: str) -> List[str]:
        """One physical line as ``line_tag``, overflow in CONC lines at ``level + 1``."""
        width = self.max_line_length - len(format_line(line_level, line_tag)) - 1
        conc_width = self.max_line_length - len(format_line(level + 1, CONC)) - 1

        chunks = split_long_text(text, width)
        lines = [format_line(line_level, line_tag, chunks[0])]
        for chunk in self._rewrap(chunks[1:], conc_width):
            lines.append(format_line(level + 1, CONC, chunk))
        return lines

    @staticmethod
    def _rewrap(chunks: List[str], width: int) -> List[str]:
        if not chunks:
            return []
        return split_long_text("".join(chunks), width)


def serialize(individuals: Iterable[Individual], families: Iterable[Family]) -> str:
    """Serialize entities with the default configuration."""
    return GedcomWriter().serialize(individuals, families)
