# src/gedcom_codec/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .tokenizer import Token
from .segmenter import GEDCOMNode, segment_lines


@dataclass
class GEDCOMTree:
    """
    The level-0 records of one GEDCOM text, with lookups by tag and by
    pointer for the record mappers.

    Indexes are built on first lookup, so pointers must already be in
    their final (normalized) form by then.

    Attributes:
        records:
            Level-0 GEDCOMNode instances in file order.
    """

    records: List[GEDCOMNode]

    _pointer_index: Dict[str, GEDCOMNode] = field(default_factory=dict, init=False, repr=False)
    _tag_index: Dict[str, List[GEDCOMNode]] = field(default_factory=dict, init=False, repr=False)
    _duplicates: List[Tuple[GEDCOMNode, GEDCOMNode]] = field(default_factory=list, init=False, repr=False)
    _indexes_built: bool = field(default=False, init=False, repr=False)

    def __len__(self) -> int:
        return len(self.records)

    def _build_indexes(self) -> None:
        for node in self.records:
            self._tag_index.setdefault(node.tag.upper(), []).append(node)
            if not node.pointer:
                continue
            first = self._pointer_index.setdefault(node.pointer, node)
            if first is not node:
                self._duplicates.append((node, first))
        self._indexes_built = True

    def _ensure_indexes(self) -> None:
        if not self._indexes_built:
            self._build_indexes()

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #

    def find_by_pointer(self, pointer: str) -> Optional[GEDCOMNode]:
        """First level-0 record defining ``pointer`` (e.g. '@I1@'), if any."""
        if not pointer:
            return None
        self._ensure_indexes()
        return self._pointer_index.get(pointer)

    def find_records_by_tag(self, tag: str) -> List[GEDCOMNode]:
        """Level-0 records with the given tag (case-insensitive), in file order."""
        if not tag:
            return []
        self._ensure_indexes()
        return list(self._tag_index.get(tag.upper(), []))

    def duplicate_pointers(self) -> List[Tuple[GEDCOMNode, GEDCOMNode]]:
        """``(record, first definition)`` for every record reusing a pointer."""
        self._ensure_indexes()
        return list(self._duplicates)

    def position(self, node: GEDCOMNode) -> int:
        """Index of ``node`` (by identity) among the level-0 records."""
        for index, record in enumerate(self.records):
            if record is node:
                return index
        raise ValueError(f"{node.tag} record on line {node.lineno} is not in this tree")

    def cut_before(self, node: GEDCOMNode) -> Tuple["GEDCOMTree", List[GEDCOMNode]]:
        """Split into a tree of the records before ``node`` and the records after it."""
        index = self.position(node)
        return GEDCOMTree(records=self.records[:index]), self.records[index + 1:]


def build_tree(tokens: Iterable[Token]) -> GEDCOMTree:
    """
    Build a GEDCOMTree from a token stream:

        tokens -> GEDCOMTree(records=[GEDCOMNode, ...])
    """
    return GEDCOMTree(records=segment_lines(tokens))
