# src/gedcom_codec/identity/xref.py
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Dict, Optional

from gedcom_codec.grammar import XREF_RE


# -----------------------------
# Core deterministic hashing
# -----------------------------

def _stable_hash(key: str) -> str:
    # Deterministic stable hashing; SHA1 is fine for identity (not security).
    return hashlib.sha1(key.encode("utf-8")).hexdigest()


def deterministic_uuid(*parts: object) -> str:
    """
    Convert arbitrary key parts into a canonical UUID-like value (8-4-4-4-12).
    Deterministic for the same parts.
    """
    key = "|".join("" if p is None else str(p) for p in parts)
    h = _stable_hash(key)[:32]
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"


# -----------------------------
# Pointer helpers
# -----------------------------

def normalize_pointer(pointer: Optional[str]) -> Optional[str]:
    """
    Normalize a GEDCOM pointer:
      - strip whitespace
      - uppercase
    Returns None when the value is not shaped like ``@...@``.
    """
    if pointer is None:
        return None

    p = pointer.strip().upper()
    if not XREF_RE.match(p):
        return None
    return p


def is_pointer(value: Optional[str]) -> bool:
    return normalize_pointer(value) is not None


def format_xref(prefix: str, number: int) -> str:
    return f"@{prefix}{number}@"


# -----------------------------
# Session-scoped table
# -----------------------------

@dataclass
class XrefTable:
    """
    Transient cross-reference table for one serialize pass.

    Tokens are handed out from a monotonic counter per prefix, so within one
    table ``@I1@, @I2@, ...`` and ``@F1@, @F2@, ...`` are unique and follow
    the order in which keys were assigned.
    """

    _counters: Dict[str, int] = field(default_factory=dict)
    _tokens: Dict[tuple, str] = field(default_factory=dict)

    def assign(self, prefix: str, key: str) -> str:
        """Return the token for ``key``, allocating the next one if new."""
        slot = (prefix, key)
        token = self._tokens.get(slot)
        if token is None:
            number = self._counters.get(prefix, 0) + 1
            self._counters[prefix] = number
            token = format_xref(prefix, number)
            self._tokens[slot] = token
        return token

    def lookup(self, prefix: str, key: Optional[str]) -> Optional[str]:
        if key is None:
            return None
        return self._tokens.get((prefix, key))

    def count(self, prefix: str) -> int:
        return self._counters.get(prefix, 0)
