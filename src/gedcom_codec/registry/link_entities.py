from __future__ import annotations

from typing import Dict, Iterable, List

from gedcom_codec.core.context import ParseContext
from gedcom_codec.core.exceptions import DanglingReferenceError
from gedcom_codec.entities.models import Family, Individual
from gedcom_codec.grammar import SPOUSE_SLOT_BY_SEX
from gedcom_codec.registry.utils import PendingReference, report_dangling


def _drop_link(family: Family, ref: PendingReference) -> None:
    if ref.tag == "CHIL":
        family.children = [c for c in family.children if c != ref.token]
    elif ref.tag == "HUSB" and family.husband == ref.token:
        family.husband = None
    elif ref.tag == "WIFE" and family.wife == ref.token:
        family.wife = None


def _check_family_side(
    refs: Iterable[PendingReference],
    individuals: Dict[str, Individual],
    families: Dict[str, Family],
    ctx: ParseContext,
) -> None:
    for ref in refs:
        if ref.token in individuals:
            continue
        report_dangling(DanglingReferenceError(ref.token, ref.owner, ref.tag, line=ref.line), ctx)
        # Only reached when collecting or ignoring: keep the tree consistent.
        _drop_link(families[ref.owner], ref)


def _reconcile_individual_side(
    refs: Iterable[PendingReference],
    individuals: Dict[str, Individual],
    families: Dict[str, Family],
    ctx: ParseContext,
) -> None:
    """
    Family records are authoritative. A FAMC/FAMS the family does not
    reciprocate is added to the family rather than discarded.
    """
    for ref in refs:
        family = families.get(ref.token)
        if family is None:
            report_dangling(DanglingReferenceError(ref.token, ref.owner, ref.tag, line=ref.line), ctx)
            continue

        person = individuals[ref.owner]

        if ref.tag == "FAMC":
            if ref.owner not in family.children:
                ctx.logger.debug("adding %s as CHIL of %s from FAMC", ref.owner, family.xref)
                family.children.append(ref.owner)
            continue

        if ref.owner in family.spouses:
            continue

        preferred = SPOUSE_SLOT_BY_SEX.get(person.sex)
        slots = [preferred] if preferred else []
        slots += [s for s in ("husband", "wife") if s != preferred]
        for slot in slots:
            if getattr(family, slot) is None:
                ctx.logger.debug("adding %s as %s of %s from FAMS", ref.owner, slot, family.xref)
                setattr(family, slot, ref.owner)
                break
        else:
            ctx.warn(
                f"FAMS {family.xref} in {ref.owner} not reciprocated and both spouse slots are taken; ignored",
                ref.line,
            )


def _enforce_family_invariants(families: Dict[str, Family], ctx: ParseContext) -> None:
    for xref in list(families):
        family = families[xref]

        if family.husband is not None and family.husband == family.wife:
            ctx.warn(f"{family.husband} is both HUSB and WIFE in {xref}; WIFE link dropped")
            family.wife = None

        for spouse in family.spouses:
            if spouse in family.children:
                ctx.warn(f"{spouse} is both spouse and child in {xref}; child link dropped")
                family.children = [c for c in family.children if c != spouse]

        if family.is_degenerate:
            ctx.warn(f"Family {xref} has no members; dropped")
            del families[xref]


def _populate_person_links(
    individuals: Dict[str, Individual],
    families: Dict[str, Family],
    ctx: ParseContext,
) -> None:
    for person in individuals.values():
        person.child_of_family = None
        person.spouse_in_families = []

    for family in families.values():
        for spouse in family.spouses:
            individuals[spouse].spouse_in_families.append(family.xref)

        for child_ref in family.children:
            child = individuals[child_ref]
            if child.child_of_family is None:
                child.child_of_family = family.xref
            else:
                ctx.warn(
                    f"{child_ref} is a child in more than one family; "
                    f"using {child.child_of_family} as parents' family"
                )


def link_entities(
    individuals: Dict[str, Individual],
    families: Dict[str, Family],
    family_refs: List[PendingReference],
    individual_refs: List[PendingReference],
    ctx: ParseContext,
) -> None:
    """
    Resolve every pointer recorded while mapping records.

    Design:
      - every INDI/FAM is mapped first
      - this pass checks pointers, reconciles both sides of each link,
        and fills ``child_of_family`` / ``spouse_in_families``

    Raises:
        DanglingReferenceError: a pointer names an undefined record
            (collected instead when the context is not fail-fast, only
            a warning under ``reader.ignore_missing_references``).
    """
    _check_family_side(family_refs, individuals, families, ctx)
    _reconcile_individual_side(individual_refs, individuals, families, ctx)
    _enforce_family_invariants(families, ctx)
    _populate_person_links(individuals, families, ctx)
