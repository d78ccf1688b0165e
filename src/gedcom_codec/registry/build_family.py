from __future__ import annotations

from typing import List, Tuple

from gedcom_codec.core.context import ParseContext
from gedcom_codec.entities.models import Family
from gedcom_codec.grammar import FAMILY_EVENTS, FAMILY_TAGS, NOTE, NOTE_SEPARATOR
from gedcom_codec.loader import GEDCOMNode
from gedcom_codec.registry.utils import (
    PendingReference,
    event_date,
    event_place,
    note_text,
    pointer_value,
    warn_unmapped,
)


def build_family(
    node: GEDCOMNode,
    ctx: ParseContext,
    shared_notes: dict,
) -> Tuple[Family, List[PendingReference]]:
    """
    Build a Family from a FAM record.

    No cross-entity linking happens here: HUSB/WIFE/CHIL pointers are
    stored on the family as written and also returned as pending
    references, which the linking pass checks against the individuals.
    """
    if node.tag != "FAM":
        raise ValueError(f"Expected FAM node, got {node.tag}")
    if not node.pointer:
        raise ValueError("FAM node is missing pointer")

    xref = node.pointer
    family = Family(xref=xref)
    refs: List[PendingReference] = []

    # Spouses and children, in order of appearance
    for child in node.children:
        if child.tag not in ("HUSB", "WIFE", "CHIL"):
            continue
        token = pointer_value(child, ctx, xref)
        if not token:
            continue

        if child.tag == "CHIL":
            if token in family.children:
                ctx.warn(f"Duplicate CHIL {token} in {xref} ignored", child.lineno)
                continue
            family.children.append(token)
        else:
            slot = "husband" if child.tag == "HUSB" else "wife"
            if getattr(family, slot) is not None:
                ctx.warn(f"Additional {child.tag} {token} in {xref} ignored", child.lineno)
                continue
            setattr(family, slot, token)

        refs.append(PendingReference(owner=xref, tag=child.tag, token=token, line=child.lineno))

    # Events
    for tag, (date_field, place_field) in FAMILY_EVENTS.items():
        event = node.find_first(tag)
        if event is None:
            continue
        setattr(family, date_field, event_date(event, ctx, xref))
        if place_field:
            setattr(family, place_field, event_place(event))

    family.divorced = node.find_first("DIV") is not None

    # Notes
    texts = [note_text(n, shared_notes, ctx, xref) for n in node.find_children(NOTE)]
    texts = [t for t in texts if t]
    family.notes = NOTE_SEPARATOR.join(texts) if texts else None

    warn_unmapped(node, FAMILY_TAGS, ctx, xref)

    return family, refs
