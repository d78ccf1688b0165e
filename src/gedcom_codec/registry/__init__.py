from __future__ import annotations

from .build_family import build_family
from .build_individual import build_individual, parse_name
from .build_note import build_shared_notes
from .header import check_header
from .link_entities import link_entities
from .utils import PendingReference

__all__ = [
    "PendingReference",
    "build_family",
    "build_individual",
    "build_shared_notes",
    "check_header",
    "link_entities",
    "parse_name",
]
