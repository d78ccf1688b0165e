# tests/test_entity_linking.py

from __future__ import annotations

import pytest

from gedcom_codec.core.exceptions import DanglingReferenceError
from gedcom_codec.parser_core import GedcomReader

from conftest import gedcom, make_config


def _parse(*lines):
    return GedcomReader(make_config()).parse(gedcom(*lines))


def _messages(result):
    return [w.message for w in result.warnings]


def test_spouse_and_child_relationships_linked():
    result = _parse(
        "0 @I1@ INDI", "1 SEX M", "1 FAMS @F1@",
        "0 @I2@ INDI", "1 SEX F", "1 FAMS @F1@",
        "0 @I3@ INDI", "1 FAMC @F1@",
        "0 @F1@ FAM", "1 HUSB @I1@", "1 WIFE @I2@", "1 CHIL @I3@",
    )

    husband, wife, child = result.individuals
    family = result.families[0]

    assert husband.spouse_in_families == ["@F1@"]
    assert wife.spouse_in_families == ["@F1@"]
    assert child.child_of_family == "@F1@"
    assert family.spouses == ["@I1@", "@I2@"]
    assert family.children == ["@I3@"]
    assert result.warnings == []


def test_links_from_family_side_only_are_enough():
    result = _parse(
        "0 @I1@ INDI",
        "0 @I2@ INDI",
        "0 @F1@ FAM", "1 HUSB @I1@", "1 CHIL @I2@",
    )
    assert result.find_individual("@I1@").spouse_in_families == ["@F1@"]
    assert result.find_individual("@I2@").child_of_family == "@F1@"


def test_unreciprocated_famc_adds_child_to_family():
    result = _parse(
        "0 @I1@ INDI",
        "0 @I2@ INDI", "1 FAMC @F1@",
        "0 @F1@ FAM", "1 HUSB @I1@",
    )
    assert result.find_family("@F1@").children == ["@I2@"]
    assert result.find_individual("@I2@").child_of_family == "@F1@"


def test_unreciprocated_fams_fills_slot_by_sex():
    result = _parse(
        "0 @I1@ INDI", "1 SEX M", "1 FAMS @F1@",
        "0 @I2@ INDI", "1 SEX F",
        "0 @F1@ FAM", "1 WIFE @I2@",
    )
    family = result.find_family("@F1@")
    assert family.husband == "@I1@"
    assert family.wife == "@I2@"


def test_unreciprocated_fams_with_full_family_is_ignored():
    result = _parse(
        "0 @I1@ INDI", "1 FAMS @F1@",
        "0 @I2@ INDI",
        "0 @I3@ INDI",
        "0 @F1@ FAM", "1 HUSB @I2@", "1 WIFE @I3@",
    )
    assert result.find_individual("@I1@").spouse_in_families == []
    assert any("not reciprocated" in m for m in _messages(result))


def test_dangling_family_member_raises():
    with pytest.raises(DanglingReferenceError) as excinfo:
        _parse("0 @I1@ INDI", "0 @F1@ FAM", "1 HUSB @I1@", "1 CHIL @I404@")
    assert excinfo.value.token == "@I404@"
    assert excinfo.value.referrer == "@F1@"
    assert excinfo.value.line == 10


def test_dangling_family_link_on_individual_raises():
    with pytest.raises(DanglingReferenceError) as excinfo:
        _parse("0 @I1@ INDI", "1 FAMS @F9@")
    assert excinfo.value.tag == "FAMS"


def test_missing_references_can_be_ignored():
    text = gedcom(
        "0 @I1@ INDI", "1 FAMS @F9@", "1 NOTE @N9@",
        "0 @F1@ FAM", "1 HUSB @I1@", "1 WIFE @I404@",
        "0 @F2@ FAM", "1 CHIL @I405@",
    )
    reader = GedcomReader(make_config(reader={"ignore_missing_references": True}))

    result = reader.parse(text)

    person = result.individuals[0]
    assert person.spouse_in_families == ["@F1@"]
    assert person.notes is None
    assert [(f.xref, f.husband, f.wife) for f in result.families] == [("@F1@", "@I1@", None)]
    messages = _messages(result)
    for token in ("@F9@", "@N9@", "@I404@", "@I405@"):
        assert any(token in m and "link dropped" in m for m in messages)
    assert any("@F2@ has no members" in m for m in messages)


def test_missing_references_still_fail_validation_by_default():
    report = GedcomReader(make_config()).validate(gedcom("0 @I1@ INDI", "1 FAMS @F9@"))
    assert report.ready is False
    assert "@F9@" in report.errors[0].message


def test_same_person_as_husband_and_wife():
    result = _parse("0 @I1@ INDI", "0 @F1@ FAM", "1 HUSB @I1@", "1 WIFE @I1@")
    family = result.families[0]
    assert family.husband == "@I1@"
    assert family.wife is None
    assert result.individuals[0].spouse_in_families == ["@F1@"]


def test_spouse_listed_as_child_loses_child_link():
    result = _parse("0 @I1@ INDI", "0 @F1@ FAM", "1 HUSB @I1@", "1 CHIL @I1@")
    assert result.families[0].children == []
    assert result.individuals[0].child_of_family is None
    assert any("both spouse and child" in m for m in _messages(result))


def test_family_without_members_is_dropped():
    result = _parse("0 @I1@ INDI", "0 @F1@ FAM")
    assert result.families == []
    assert any("no members" in m for m in _messages(result))


def test_child_of_two_families_keeps_first():
    result = _parse(
        "0 @I1@ INDI",
        "0 @I2@ INDI",
        "0 @I3@ INDI",
        "0 @F1@ FAM", "1 HUSB @I1@", "1 CHIL @I3@",
        "0 @F2@ FAM", "1 HUSB @I2@", "1 CHIL @I3@",
    )
    assert result.find_individual("@I3@").child_of_family == "@F1@"
    assert result.find_family("@F2@").children == ["@I3@"]
    assert any("more than one family" in m for m in _messages(result))


def test_pointers_are_case_insensitive():
    result = _parse("0 @i1@ INDI", "0 @f1@ FAM", "1 HUSB @I1@")
    assert result.individuals[0].xref == "@I1@"
    assert result.families[0].husband == "@I1@"


def test_remarriage_gives_two_spouse_families():
    result = _parse(
        "0 @I1@ INDI", "1 SEX M",
        "0 @I2@ INDI", "1 SEX F",
        "0 @I3@ INDI", "1 SEX F",
        "0 @F1@ FAM", "1 HUSB @I1@", "1 WIFE @I2@", "1 DIV Y",
        "0 @F2@ FAM", "1 HUSB @I1@", "1 WIFE @I3@",
    )
    assert result.find_individual("@I1@").spouse_in_families == ["@F1@", "@F2@"]
