from .xref import XrefTable, deterministic_uuid, format_xref, is_pointer, normalize_pointer

__all__ = [
    "XrefTable",
    "deterministic_uuid",
    "format_xref",
    "is_pointer",
    "normalize_pointer",
]
