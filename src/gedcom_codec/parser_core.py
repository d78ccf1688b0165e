"""
parser_core.py
GEDCOM reader engine: text -> validated Individual / Family entities.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from gedcom_codec.config import get_config
from gedcom_codec.core.context import ParseContext
from gedcom_codec.core.exceptions import DuplicateXrefError, GedcomError
from gedcom_codec.entities.models import Family, Individual, ParseResult, ValidationReport
from gedcom_codec.grammar import FAM, INDI, KNOWN_RECORD_TAGS, TRLR
from gedcom_codec.identity import normalize_pointer
from gedcom_codec.loader import (
    GEDCOMNode,
    GEDCOMTree,
    Token,
    build_tree,
    reconstruct_values,
    tokenize_collect,
    tokenize_text,
)
from gedcom_codec.logging import get_logger
from gedcom_codec.registry import (
    PendingReference,
    build_family,
    build_individual,
    build_shared_notes,
    check_header,
    link_entities,
)


class GedcomReader:
    """
    High-level reader:
      - tokenizes
      - builds the record tree
      - folds CONT/CONC values
      - maps HEAD / INDI / FAM / NOTE / TRLR records
      - resolves cross-references

    The reader keeps no state between calls; each call gets its own
    ParseContext.
    """

    def __init__(self, config=None):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger(__name__)
        self.max_reported = int(self.cfg.reader.get("max_reported_errors", 20))

    # ---------------------------------------------------------
    # Public API
    # ---------------------------------------------------------
    def parse(self, text: str) -> ParseResult:
        """
        Parse GEDCOM text, failing fast on the first hard error.

        Raises:
            MalformedLineError, InvalidNestingError, DuplicateXrefError,
            UnsupportedCharsetError, DanglingReferenceError
        """
        ctx = self._context(fail_fast=True)
        result = self._run(text, ctx)
        self.log.info(
            "Parsed GEDCOM: %d individuals, %d families, %d warnings",
            len(result.individuals),
            len(result.families),
            len(result.warnings),
        )
        return result

    def validate(self, text: str) -> ValidationReport:
        """
        Run every reader stage without persisting anything and report
        counts, errors and warnings for an import preview.
        """
        ctx = self._context(fail_fast=False)
        result: Optional[ParseResult] = None

        try:
            result = self._run(text, ctx)
        except GedcomError as exc:
            # Nesting errors stop the walk even when collecting.
            ctx.error(str(exc), exc.line)

        if result is not None and not ctx.errors:
            people, families = len(result.individuals), len(result.families)
        else:
            people = ctx.stats.get("indi_records", 0)
            families = ctx.stats.get("fam_records", 0)

        report = ValidationReport(
            people_count=people,
            families_count=families,
            errors=ctx.errors[: self.max_reported],
            warnings=ctx.warnings[: self.max_reported],
            incomplete=ctx.incomplete,
        )
        self.log.info(
            "Validated GEDCOM: ready=%s people=%d families=%d errors=%d warnings=%d",
            report.ready,
            people,
            families,
            len(ctx.errors),
            len(ctx.warnings),
        )
        return report

    # ---------------------------------------------------------
    # Stages
    # ---------------------------------------------------------
    def _context(self, fail_fast: bool) -> ParseContext:
        return ParseContext(config=self.cfg, logger=self.log, fail_fast=fail_fast)

    def _tokenize(self, text: str, ctx: ParseContext) -> List[Token]:
        if ctx.fail_fast:
            return list(tokenize_text(text))

        tokens, errors = tokenize_collect(text, limit=self.max_reported)
        for exc in errors:
            ctx.error(str(exc), exc.line)
        return tokens

    def _run(self, text: str, ctx: ParseContext) -> Optional[ParseResult]:
        tokens = self._tokenize(text, ctx)
        ctx.stats["lines"] = len(tokens)
        ctx.stats["indi_records"] = sum(1 for t in tokens if t.level == 0 and t.tag == INDI)
        ctx.stats["fam_records"] = sum(1 for t in tokens if t.level == 0 and t.tag == FAM)
        if ctx.errors:
            return None

        tree = build_tree(tokens)
        reconstruct_values(tree.records)
        self._normalize_pointers(tree.records)
        self.log.debug("Built tree with %d level-0 records", len(tree))

        body = self._select_records(tree, ctx)

        check_header(body, ctx)
        if ctx.errors:
            return None

        for node, first in body.duplicate_pointers():
            ctx.fail(DuplicateXrefError(node.pointer, node.lineno, first.lineno))
        shared_notes = build_shared_notes(body, ctx)

        individuals: Dict[str, Individual] = {}
        families: Dict[str, Family] = {}
        individual_refs: List[PendingReference] = []
        family_refs: List[PendingReference] = []

        for node in body.records:
            if node.tag == INDI:
                if not self._has_pointer(node, ctx) or body.find_by_pointer(node.pointer) is not node:
                    continue
                person, refs = build_individual(node, ctx, shared_notes)
                individuals[node.pointer] = person
                individual_refs.extend(refs)
            elif node.tag == FAM:
                if not self._has_pointer(node, ctx) or body.find_by_pointer(node.pointer) is not node:
                    continue
                family, refs = build_family(node, ctx, shared_notes)
                families[node.pointer] = family
                family_refs.extend(refs)
            elif node.tag not in KNOWN_RECORD_TAGS:
                ctx.warn(f"Unrecognized record {node.tag} skipped", node.lineno)

        link_entities(individuals, families, family_refs, individual_refs, ctx)

        return ParseResult(
            individuals=list(individuals.values()),
            families=list(families.values()),
            warnings=ctx.warnings,
            incomplete=ctx.incomplete,
            header=dict(ctx.header),
        )

    def _select_records(self, tree: GEDCOMTree, ctx: ParseContext) -> GEDCOMTree:
        """Cut the records at TRLR, flagging a missing trailer."""
        trailers = tree.find_records_by_tag(TRLR)
        if not trailers:
            ctx.incomplete = True
            ctx.warn("Missing TRLR record; the file may be truncated")
            return tree

        body, trailing = tree.cut_before(trailers[0])
        if trailing:
            ctx.warn(f"{len(trailing)} record(s) after TRLR ignored", trailing[0].lineno)
        return body

    @staticmethod
    def _normalize_pointers(records: List[GEDCOMNode]) -> None:
        """Upper-case level-0 pointers so lookups are case-insensitive."""
        for node in records:
            if node.pointer:
                node.pointer = normalize_pointer(node.pointer) or node.pointer

    def _has_pointer(self, node: GEDCOMNode, ctx: ParseContext) -> bool:
        if node.pointer:
            return True
        ctx.warn(f"{node.tag} record without identifier skipped", node.lineno)
        return False


def parse(text: str) -> ParseResult:
    """Parse GEDCOM text with the default configuration."""
    return GedcomReader().parse(text)


def validate(text: str) -> ValidationReport:
    """Validate GEDCOM text with the default configuration."""
    return GedcomReader().validate(text)
