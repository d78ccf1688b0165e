# src/gedcom_codec/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_codec.loader import (
        Token,
        GEDCOMNode,
        GEDCOMTree,
        tokenize_text,
        tokenize_line,
        segment_lines,
        build_tree,
        reconstruct_values,
    )
"""

from __future__ import annotations

from .tokenizer import (
    Token,
    decode_gedcom_bytes,
    read_gedcom_file,
    tokenize_collect,
    tokenize_file,
    tokenize_line,
    tokenize_text,
)
from .segmenter import GEDCOMNode, segment_lines
from .tree_builder import GEDCOMTree, build_tree
from .value_reconstructor import reconstruct_values


__all__ = [
    "Token",
    "GEDCOMNode",
    "GEDCOMTree",
    "decode_gedcom_bytes",
    "read_gedcom_file",
    "tokenize_collect",
    "tokenize_file",
    "tokenize_line",
    "tokenize_text",
    "segment_lines",
    "build_tree",
    "reconstruct_values",
]
