# src/gedcom_codec/loader/value_reconstructor.py

"""
Value Reconstructor: Handles GEDCOM CONT / CONC tags.

Rules (GEDCOM 5.5.1):
    - CONC: Append text directly to the parent's value.
            No newline added.

    - CONT: Append a newline + the text.
            Always produces a new line in the logical output.

Examples:
    Parent NOTE value: "Line one"
    Child CONC value:  " and more"
        -> "Line one and more"

    Child CONT value:  "Second line"
        -> "Line one and more\nSecond line"

This module walks the GEDCOMNode tree (from the segmenter) and folds all
values according to these rules, removing CONC/CONT nodes afterwards.
"""

from __future__ import annotations

from typing import List

from gedcom_codec.grammar import CONC, CONT
from .segmenter import GEDCOMNode


def _reconstruct_node(root: GEDCOMNode) -> None:
    """
    Reconstruct values for this node and all descendants, in place.

    After reconstruction:
      - each node's value holds the final folded text
      - CONC and CONT child nodes are removed
      - other children remain and are also processed
    """
    pending = [root]
    while pending:
        node = pending.pop()
        parts: List[str] = [node.value or ""]
        kept: List[GEDCOMNode] = []

        for child in node.children:
            if child.tag == CONC:
                parts.append(child.value or "")
            elif child.tag == CONT:
                parts.append("\n")
                parts.append(child.value or "")
            else:
                kept.append(child)
                pending.append(child)

        node.value = "".join(parts)
        node.children = kept


def reconstruct_values(records: List[GEDCOMNode]) -> List[GEDCOMNode]:
    """
    Reconstruct all values for every top-level record and its descendants.

    Args:
        records: The list of root GEDCOMNode objects (level-0 records).

    Returns:
        The same list (records), after in-place reconstruction.

    Structure is unchanged except for removal of CONC/CONT nodes.
    """
    for rec in records:
        _reconstruct_node(rec)

    return records
