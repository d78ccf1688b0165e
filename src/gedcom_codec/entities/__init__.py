from __future__ import annotations

from .compare import canonical_graph, graph_differences
from .models import (
    FAMILY_FACT_FIELDS,
    INDIVIDUAL_FACT_FIELDS,
    Family,
    Individual,
    Issue,
    ParseResult,
    ValidationReport,
    entity_fields,
)

__all__ = [
    "FAMILY_FACT_FIELDS",
    "INDIVIDUAL_FACT_FIELDS",
    "Family",
    "Individual",
    "Issue",
    "ParseResult",
    "ValidationReport",
    "canonical_graph",
    "entity_fields",
    "graph_differences",
]
