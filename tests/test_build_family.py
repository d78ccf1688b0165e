# tests/test_build_family.py

from __future__ import annotations

import pytest

from gedcom_codec.dates import GedcomDate
from gedcom_codec.loader import GEDCOMNode
from gedcom_codec.registry import build_family


def _fam(records_from, *lines):
    return records_from("\n".join(["0 @F1@ FAM", *lines]))[0]


def test_full_family(records_from, ctx):
    node = _fam(
        records_from,
        "1 HUSB @I1@",
        "1 WIFE @i2@",
        "1 CHIL @I4@",
        "1 CHIL @I3@",
        "1 MARR",
        "2 DATE 10 JUN 1945",
        "2 PLAC Springfield",
        "1 DIV",
        "2 DATE 1960",
        "1 NOTE Married twice",
    )

    family, refs = build_family(node, ctx, {})

    assert family.xref == "@F1@"
    assert family.husband == "@I1@"
    assert family.wife == "@I2@"
    assert family.children == ["@I4@", "@I3@"]
    assert family.marriage_date == GedcomDate(year=1945, month=6, day=10)
    assert family.marriage_place == "Springfield"
    assert family.divorce_date == GedcomDate(year=1960)
    assert family.divorced is True
    assert family.notes == "Married twice"
    assert [r.tag for r in refs] == ["HUSB", "WIFE", "CHIL", "CHIL"]
    assert ctx.warnings == []


def test_div_without_date_sets_flag(records_from, ctx):
    family, _ = build_family(_fam(records_from, "1 HUSB @I1@", "1 DIV Y"), ctx, {})
    assert family.divorced is True
    assert family.divorce_date is None


def test_no_div_means_not_divorced(records_from, ctx):
    family, _ = build_family(_fam(records_from, "1 HUSB @I1@"), ctx, {})
    assert family.divorced is False


def test_duplicate_child_and_extra_spouse_ignored(records_from, ctx):
    family, refs = build_family(
        _fam(records_from, "1 HUSB @I1@", "1 HUSB @I5@", "1 CHIL @I3@", "1 CHIL @I3@"),
        ctx,
        {},
    )
    assert family.husband == "@I1@"
    assert family.children == ["@I3@"]
    assert len(refs) == 2
    assert len(ctx.warnings) == 2


def test_non_pointer_member_ignored(records_from, ctx):
    family, refs = build_family(_fam(records_from, "1 WIFE Mary"), ctx, {})
    assert family.wife is None
    assert refs == []
    assert len(ctx.warnings) == 1


def test_wrong_node_type_rejected(ctx):
    with pytest.raises(ValueError):
        build_family(GEDCOMNode(level=0, tag="INDI", pointer="@I1@"), ctx, {})


def test_missing_pointer_rejected(ctx):
    with pytest.raises(ValueError):
        build_family(GEDCOMNode(level=0, tag="FAM"), ctx, {})
