from __future__ import annotations

from typing import Dict

from gedcom_codec.core.context import ParseContext
from gedcom_codec.grammar import NOTE
from gedcom_codec.loader import GEDCOMTree


def build_shared_notes(tree: GEDCOMTree, ctx: ParseContext) -> Dict[str, str]:
    """
    Collect level-0 NOTE records by pointer.

    Values arrive with CONT/CONC already folded, so the record value is the
    full note text. Sub-structures such as SOUR citations are not modeled.
    """
    notes: Dict[str, str] = {}

    for node in tree.find_records_by_tag(NOTE):
        if not node.pointer:
            ctx.warn("NOTE record without identifier skipped", node.lineno)
            continue
        if tree.find_by_pointer(node.pointer) is not node:
            continue
        notes[node.pointer] = node.value
        for child in node.children:
            ctx.warn(f"Unrecognized tag {child.tag} in {node.pointer} skipped", child.lineno)

    return notes
