# tests/test_build_individual.py

from __future__ import annotations

import pytest

from gedcom_codec.core.exceptions import DanglingReferenceError
from gedcom_codec.dates import GedcomDate
from gedcom_codec.loader import GEDCOMNode
from gedcom_codec.registry import build_individual, parse_name

from conftest import make_config


def _indi(records_from, *lines):
    return records_from("\n".join(["0 @I1@ INDI", *lines]))[0]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("John Paul /Smith/", ("John Paul", "Smith")),
        ("John /Smith/ Jr.", ("John Jr.", "Smith")),
        ("/Smith/", (None, "Smith")),
        ("John", ("John", None)),
        ("John //", ("John", None)),
        ("  John   /Smith/  ", ("John", "Smith")),
        ("Mary  Ann /van  der Berg/", ("Mary  Ann", "van  der Berg")),
        ("", (None, None)),
        (None, (None, None)),
    ],
)
def test_parse_name(value, expected):
    assert parse_name(value) == expected


def test_full_individual(records_from, ctx):
    node = _indi(
        records_from,
        "1 NAME John /Smith/",
        "1 SEX m",
        "1 BIRT",
        "2 DATE 12 MAR 1920",
        "2 PLAC  Springfield,   Illinois ",
        "1 DEAT",
        "2 DATE 1990",
        "1 OCCU Carpenter",
        "1 NOTE Line one",
        "2 CONT Line two",
        "1 FAMC @F1@",
        "1 FAMS @f2@",
    )

    person, refs = build_individual(node, ctx, {})

    assert person.xref == "@I1@"
    assert (person.given_name, person.surname) == ("John", "Smith")
    assert person.sex == "M"
    assert person.birth_date == GedcomDate(year=1920, month=3, day=12)
    assert person.birth_place == "Springfield, Illinois"
    assert person.death_date == GedcomDate(year=1990)
    assert person.living is False
    assert person.occupation == "Carpenter"
    assert person.notes == "Line one\nLine two"
    assert [(r.tag, r.token) for r in refs] == [("FAMC", "@F1@"), ("FAMS", "@F2@")]
    assert ctx.warnings == []


def test_defaults_for_sparse_record(records_from, ctx):
    person, refs = build_individual(_indi(records_from), ctx, {})

    assert person.sex == "U"
    assert person.living is True
    assert person.given_name is None
    assert person.notes is None
    assert refs == []


def test_deat_without_details_marks_deceased(records_from, ctx):
    person, _ = build_individual(_indi(records_from, "1 DEAT Y"), ctx, {})
    assert person.living is False
    assert person.death_date is None


def test_unknown_sex_becomes_u_with_warning(records_from, ctx):
    person, _ = build_individual(_indi(records_from, "1 SEX X"), ctx, {})
    assert person.sex == "U"
    assert "Unknown SEX" in ctx.warnings[0].message
    assert ctx.warnings[0].line == 2


def test_additional_name_and_occupation_ignored(records_from, ctx):
    person, _ = build_individual(
        _indi(records_from, "1 NAME A /B/", "1 NAME C /D/", "1 OCCU Baker", "1 OCCU Smith"),
        ctx,
        {},
    )
    assert (person.given_name, person.surname) == ("A", "B")
    assert person.occupation == "Baker"
    assert len(ctx.warnings) == 2


def test_multiple_notes_are_joined(records_from, ctx):
    person, _ = build_individual(
        _indi(records_from, "1 NOTE first", "1 NOTE @N1@"),
        ctx,
        {"@N1@": "shared"},
    )
    assert person.notes == "first\n\nshared"


def test_note_pointer_to_missing_record_raises(records_from, ctx):
    with pytest.raises(DanglingReferenceError):
        build_individual(_indi(records_from, "1 NOTE @N9@"), ctx, {})


def test_non_pointer_family_link_warns(records_from, ctx):
    _, refs = build_individual(_indi(records_from, "1 FAMC F1"), ctx, {})
    assert refs == []
    assert "not a record pointer" in ctx.warnings[0].message


def test_unrecognized_date_warns(records_from, ctx):
    person, _ = build_individual(_indi(records_from, "1 BIRT", "2 DATE sometime in spring"), ctx, {})
    assert person.birth_date.text == "sometime in spring"
    assert "Unrecognized date" in ctx.warnings[0].message


def test_unmapped_tags_warn_when_enabled(records_from, ctx):
    build_individual(_indi(records_from, "1 _CUSTOM x", "1 RESI"), ctx, {})
    assert [w.line for w in ctx.warnings] == [2, 3]


def test_unmapped_tags_silent_when_disabled(records_from, ctx):
    ctx.config = make_config(reader={"warn_unmapped_tags": False})
    build_individual(_indi(records_from, "1 _CUSTOM x"), ctx, {})
    assert ctx.warnings == []


def test_wrong_node_type_rejected(ctx):
    with pytest.raises(ValueError):
        build_individual(GEDCOMNode(level=0, tag="FAM", pointer="@F1@"), ctx, {})
