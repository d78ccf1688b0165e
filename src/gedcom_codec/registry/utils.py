from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gedcom_codec.core.context import ParseContext
from gedcom_codec.core.exceptions import DanglingReferenceError
from gedcom_codec.dates import GedcomDate, parse_date
from gedcom_codec.identity import normalize_pointer
from gedcom_codec.loader import GEDCOMNode


@dataclass(frozen=True)
class PendingReference:
    """
    A pointer seen while mapping a record, resolved once every record is known.

    Attributes:
        owner: xref of the record holding the pointer.
        tag: FAMC, FAMS, HUSB, WIFE or CHIL.
        token: normalized target xref.
        line: line of the pointer.
    """
    owner: str
    tag: str
    token: str
    line: int


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim the edges of a single-line value; empty text becomes None."""
    if value is None:
        return None
    return value.strip() or None


def report_dangling(error: DanglingReferenceError, ctx: ParseContext) -> None:
    """
    Raise or collect an undefined pointer; with
    ``reader.ignore_missing_references`` it is only a warning and the
    caller drops the link.
    """
    if ctx.config.reader.get("ignore_missing_references", False):
        ctx.warn(f"{error.message}; link dropped", error.line)
        return
    ctx.fail(error)


def pointer_value(node: GEDCOMNode, ctx: ParseContext, owner: str) -> Optional[str]:
    """Return the normalized pointer in ``node.value``, warning when it is not one."""
    token = normalize_pointer(node.value)
    if token is None:
        ctx.warn(f"{node.tag} in {owner} is not a record pointer ({node.value!r}); ignored", node.lineno)
    return token


def event_date(event: GEDCOMNode, ctx: ParseContext, owner: str) -> Optional[GedcomDate]:
    """Parse the DATE child of an event, flagging text that is not a GEDCOM date."""
    date_node = event.find_first("DATE")
    if date_node is None:
        return None

    date = parse_date(date_node.value)
    if date is not None and not date.recognized:
        ctx.warn(
            f"Unrecognized date {date.text!r} on {event.tag} of {owner}; kept as written",
            date_node.lineno,
        )
    return date


def event_place(event: GEDCOMNode) -> Optional[str]:
    return clean_text(event.first_value("PLAC"))


def note_text(
    node: GEDCOMNode,
    shared_notes: dict,
    ctx: ParseContext,
    owner: str,
) -> Optional[str]:
    """
    Text of a NOTE substructure: inline text, or the text of the level-0
    NOTE record it points to.
    """
    token = normalize_pointer(node.value)
    if token is None:
        return node.value or None

    if token not in shared_notes:
        report_dangling(DanglingReferenceError(token, owner, "NOTE", line=node.lineno), ctx)
        return None
    return shared_notes[token] or None


def warn_unmapped(node: GEDCOMNode, known: set, ctx: ParseContext, owner: str) -> None:
    if not ctx.config.reader.get("warn_unmapped_tags", True):
        return
    for child in node.children:
        if child.tag not in known:
            ctx.warn(f"Unrecognized tag {child.tag} in {owner} skipped", child.lineno)
