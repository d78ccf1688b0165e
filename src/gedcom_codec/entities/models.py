from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from gedcom_codec.dates import GedcomDate


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class Individual:
    """
    A person.

    ``xref`` is the transient token of one parse; ``person_id`` is the
    stable identity given by the data-access layer. References between
    entities use ``key``, whichever of the two is set.
    """
    xref: Optional[str] = None
    person_id: Optional[str] = None

    given_name: Optional[str] = None
    surname: Optional[str] = None
    sex: str = "U"
    living: bool = True

    birth_date: Optional[GedcomDate] = None
    birth_place: Optional[str] = None
    death_date: Optional[GedcomDate] = None
    death_place: Optional[str] = None

    occupation: Optional[str] = None
    notes: Optional[str] = None

    # Family keys, populated by reference resolution.
    child_of_family: Optional[str] = None
    spouse_in_families: List[str] = field(default_factory=list)

    @property
    def key(self) -> Optional[str]:
        return self.person_id or self.xref

    @property
    def display_name(self) -> str:
        return " ".join(p for p in (self.given_name, self.surname) if p) or "(unnamed)"


@dataclass(slots=True)
class Family:
    """
    A union and its children. ``husband``, ``wife`` and ``children`` hold
    person keys; children keep their order of appearance.
    """
    xref: Optional[str] = None
    family_id: Optional[str] = None

    husband: Optional[str] = None
    wife: Optional[str] = None
    children: List[str] = field(default_factory=list)

    marriage_date: Optional[GedcomDate] = None
    marriage_place: Optional[str] = None
    divorce_date: Optional[GedcomDate] = None
    divorced: bool = False

    notes: Optional[str] = None

    @property
    def key(self) -> Optional[str]:
        return self.family_id or self.xref

    @property
    def spouses(self) -> List[str]:
        return [p for p in (self.husband, self.wife) if p]

    @property
    def is_degenerate(self) -> bool:
        return not (self.husband or self.wife or self.children)


# Fields that carry genealogical facts (as opposed to identity and links).
INDIVIDUAL_FACT_FIELDS = (
    "given_name",
    "surname",
    "sex",
    "living",
    "birth_date",
    "birth_place",
    "death_date",
    "death_place",
    "occupation",
    "notes",
)

FAMILY_FACT_FIELDS = (
    "marriage_date",
    "marriage_place",
    "divorce_date",
    "divorced",
    "notes",
)


def entity_fields(entity: Any, names: tuple = ()) -> Dict[str, Any]:
    """Return a plain dict of an entity's fields (all, or only ``names``)."""
    wanted = names or tuple(f.name for f in fields(entity))
    return {name: getattr(entity, name) for name in wanted}


# -----------------------------
# Reports
# -----------------------------

@dataclass(slots=True)
class Issue:
    """A located problem: ``line`` is 1-based, or None when not tied to a line."""
    line: Optional[int]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "message": self.message}


@dataclass(slots=True)
class ParseResult:
    individuals: List[Individual] = field(default_factory=list)
    families: List[Family] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)

    # True when the text ended without a TRLR record.
    incomplete: bool = False
    header: Dict[str, Optional[str]] = field(default_factory=dict)

    def find_individual(self, xref: str) -> Optional[Individual]:
        for ind in self.individuals:
            if ind.xref == xref:
                return ind
        return None

    def find_family(self, xref: str) -> Optional[Family]:
        for fam in self.families:
            if fam.xref == xref:
                return fam
        return None


@dataclass(slots=True)
class ValidationReport:
    people_count: int = 0
    families_count: int = 0
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)
    incomplete: bool = False

    @property
    def ready(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Shape consumed by the import preview screen."""
        return {
            "peopleCount": self.people_count,
            "familiesCount": self.families_count,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "ready": self.ready,
            "incomplete": self.incomplete,
        }
