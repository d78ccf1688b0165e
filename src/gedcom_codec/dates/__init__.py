from .gedcom_date import MONTHS, GedcomDate, parse_date

__all__ = ["MONTHS", "GedcomDate", "parse_date"]
