# src/gedcom_codec/loader/segmenter.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from gedcom_codec.core.exceptions import InvalidNestingError
from .tokenizer import Token


@dataclass
class GEDCOMNode:
    """
    A hierarchical GEDCOM tree node produced from a flat token stream.

    Attributes:
        level: GEDCOM level number (0 for records, >0 for substructures).
        tag: The GEDCOM tag (HEAD, INDI, BIRT, DATE, NOTE, etc.).
        value: The raw tag value (string).
        pointer: Optional GEDCOM @XREF@ pointer on level-0 records.
        children: Nested GEDCOMNode list ordered as they appeared.
        lineno: Line number in original text (for error reporting).
    """

    level: int
    tag: str
    value: str = ""
    pointer: Optional[str] = None
    lineno: int = 0
    children: List["GEDCOMNode"] = field(default_factory=list)

    # ---------- Helper / Mixin Methods ----------

    def add_child(self, child: "GEDCOMNode") -> None:
        self.children.append(child)

    def find_children(self, tag: str) -> List["GEDCOMNode"]:
        """Return all direct children of this node with a given tag."""
        return [c for c in self.children if c.tag == tag]

    def find_first(self, tag: str) -> Optional["GEDCOMNode"]:
        """Return the first direct child with this tag, or None."""
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    def first_value(self, tag: str) -> Optional[str]:
        """Return the value of the first direct child with this tag, or None."""
        child = self.find_first(tag)
        return child.value if child is not None else None

    def iter_subtree(self) -> Iterator["GEDCOMNode"]:
        """Yield this node and all descendants in depth-first order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        ptr = f" {self.pointer}" if self.pointer else ""
        return f"<GEDCOMNode {self.level}{ptr} {self.tag}: {self.value!r}>"


# ---------- SEGMENTER IMPLEMENTATION ----------

def segment_lines(tokens: Iterable[Token]) -> List[GEDCOMNode]:
    """
    Fold a flat token stream into a hierarchical tree in one linear pass.

    Rules:
        - Level 0 tokens are roots.
        - Level N nodes are children of the nearest previous node at
          level N-1.
        - Levels may not jump more than +1 (e.g., level 3 cannot follow
          level 1), and the first token must be level 0.

    Returns the level-0 nodes with their descendants attached.

    Raises:
        InvalidNestingError: on a level jump or an orphaned first line.
    """
    root_nodes: List[GEDCOMNode] = []
    stack: List[GEDCOMNode] = []  # stack[level] = open node at that level

    for tok in tokens:
        node = GEDCOMNode(
            level=tok.level,
            tag=tok.tag,
            value=tok.value,
            pointer=tok.pointer,
            lineno=tok.lineno,
        )

        # Level-0: always a new root
        if tok.level == 0:
            root_nodes.append(node)
            stack.clear()
            stack.append(node)
            continue

        if not stack:
            raise InvalidNestingError(
                f"Line {tok.lineno}: level {tok.level} record has no level-0 parent",
                line=tok.lineno,
            )

        if tok.level > len(stack):
            raise InvalidNestingError(
                f"Line {tok.lineno}: level jumped from {len(stack) - 1} to "
                f"{tok.level} without intermediate parent",
                line=tok.lineno,
            )

        # Pop the stack down to the parent level
        del stack[tok.level:]
        stack[-1].add_child(node)
        stack.append(node)

    return root_nodes
