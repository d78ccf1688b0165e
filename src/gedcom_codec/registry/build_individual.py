from __future__ import annotations

from typing import List, Optional, Tuple

from gedcom_codec.core.context import ParseContext
from gedcom_codec.entities.models import Individual
from gedcom_codec.grammar import (
    DEFAULT_SEX,
    INDIVIDUAL_EVENTS,
    INDIVIDUAL_TAGS,
    NOTE,
    NOTE_SEPARATOR,
    SEX_CODES,
)
from gedcom_codec.loader import GEDCOMNode
from gedcom_codec.registry.utils import (
    PendingReference,
    clean_text,
    event_date,
    event_place,
    note_text,
    pointer_value,
    warn_unmapped,
)


def parse_name(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a GEDCOM NAME value into (given, surname).

    The surname sits between slashes. Text before it is the given name;
    text after the closing slash (a suffix such as "Jr.") is appended to the
    given name.

        "John Paul /Smith/"    -> ("John Paul", "Smith")
        "John /Smith/ Jr."     -> ("John Jr.", "Smith")
        "/Smith/"              -> (None, "Smith")
        "John"                 -> ("John", None)
    """
    text = value or ""
    if "/" not in text:
        return clean_text(text), None

    before, _, after = text.partition("/")
    surname, _, suffix = after.partition("/")
    given = " ".join(part for part in (before.strip(), suffix.strip()) if part)
    return given or None, clean_text(surname)


def parse_sex(node: Optional[GEDCOMNode], ctx: ParseContext, owner: str) -> str:
    if node is None:
        return DEFAULT_SEX

    code = node.value.strip().upper()
    if code in SEX_CODES:
        return code
    if code:
        ctx.warn(f"Unknown SEX value {node.value!r} in {owner}; using U", node.lineno)
    return DEFAULT_SEX


def build_individual(
    node: GEDCOMNode,
    ctx: ParseContext,
    shared_notes: dict,
) -> Tuple[Individual, List[PendingReference]]:
    """
    Build an Individual from an INDI record.

    Returns the entity and the FAMC/FAMS pointers it holds; those are
    resolved against the families once every record has been mapped.
    """
    if node.tag != "INDI":
        raise ValueError(f"Expected INDI node, got {node.tag}")
    if not node.pointer:
        raise ValueError("INDI node is missing pointer")

    xref = node.pointer
    individual = Individual(xref=xref)
    refs: List[PendingReference] = []

    # Name
    names = node.find_children("NAME")
    if names:
        individual.given_name, individual.surname = parse_name(names[0].value)
        for extra in names[1:]:
            ctx.warn(f"Additional NAME {extra.value!r} in {xref} ignored", extra.lineno)

    individual.sex = parse_sex(node.find_first("SEX"), ctx, xref)

    # Vital events
    for tag, (date_field, place_field) in INDIVIDUAL_EVENTS.items():
        event = node.find_first(tag)
        if event is None:
            continue
        setattr(individual, date_field, event_date(event, ctx, xref))
        setattr(individual, place_field, event_place(event))

    # Any DEAT structure, even "1 DEAT Y" with no details, means deceased.
    individual.living = node.find_first("DEAT") is None

    # Occupation
    occupations = node.find_children("OCCU")
    if occupations:
        individual.occupation = clean_text(occupations[0].value)
        for extra in occupations[1:]:
            ctx.warn(f"Additional OCCU {extra.value!r} in {xref} ignored", extra.lineno)

    # Notes
    texts = [note_text(n, shared_notes, ctx, xref) for n in node.find_children(NOTE)]
    texts = [t for t in texts if t]
    individual.notes = NOTE_SEPARATOR.join(texts) if texts else None

    # Family links
    for child in node.children:
        if child.tag not in ("FAMC", "FAMS"):
            continue
        token = pointer_value(child, ctx, xref)
        if token:
            refs.append(PendingReference(owner=xref, tag=child.tag, token=token, line=child.lineno))

    warn_unmapped(node, INDIVIDUAL_TAGS, ctx, xref)

    return individual, refs
