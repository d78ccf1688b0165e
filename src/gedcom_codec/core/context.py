from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gedcom_codec.core.exceptions import GedcomError
from gedcom_codec.entities.models import Issue


@dataclass
class ParseContext:
    """
    Per-call reader state.

    One instance lives for exactly one parse/validate call and is never
    shared, so the reader itself holds no mutable state between calls.
    """

    config: Any
    logger: Any

    # Fail on the first hard error, or collect them (validate mode).
    fail_fast: bool = True

    warnings: List[Issue] = field(default_factory=list)
    errors: List[Issue] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)
    header: Dict[str, Optional[str]] = field(default_factory=dict)

    incomplete: bool = False

    def warn(self, message: str, line: Optional[int] = None) -> None:
        self.logger.debug("warning at line %s: %s", line, message)
        self.warnings.append(Issue(line=line, message=message))

    def error(self, message: str, line: Optional[int] = None) -> None:
        self.errors.append(Issue(line=line, message=message))

    def fail(self, exc: GedcomError) -> None:
        """Raise a hard error, or record it when collecting (validate mode)."""
        if self.fail_fast:
            raise exc
        self.logger.debug("collected error: %s", exc)
        self.error(str(exc), exc.line)
