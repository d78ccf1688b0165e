# tests/test_dates.py

from __future__ import annotations

import pytest

from gedcom_codec.dates import GedcomDate, parse_date


def test_simple_year():
    d = parse_date("1900")
    assert d == GedcomDate(year=1900)
    assert d.precision == "year"
    assert d.isoformat() == "1900"


def test_month_year():
    d = parse_date("JAN 1900")
    assert (d.year, d.month, d.day) == (1900, 1, None)
    assert d.precision == "month"
    assert d.isoformat() == "1900-01"


def test_full_date():
    d = parse_date("1 JAN 1900")
    assert (d.year, d.month, d.day) == (1900, 1, 1)
    assert d.precision == "day"
    assert d.isoformat() == "1900-01-01"


def test_month_is_case_insensitive_and_sept_accepted():
    assert parse_date("18 sept 1980") == GedcomDate(year=1980, month=9, day=18)


@pytest.mark.parametrize("qualifier", ["ABT", "CAL", "EST", "BEF", "AFT", "INT"])
def test_qualifiers(qualifier):
    d = parse_date(f"{qualifier} 1900")
    assert d.qualifier == qualifier
    assert d.year == 1900
    assert d.to_gedcom() == f"{qualifier} 1900"


def test_qualifier_with_trailing_dot():
    assert parse_date("abt. 1900").qualifier == "ABT"


def test_to_gedcom_drops_leading_zero():
    assert parse_date("01 JAN 1900").to_gedcom() == "1 JAN 1900"


def test_leap_day_validation():
    assert parse_date("29 FEB 2000").recognized
    assert parse_date("29 FEB 2000").is_simple

    not_leap = parse_date("29 FEB 1900")
    assert not not_leap.is_simple
    assert not not_leap.recognized
    assert not_leap.text == "29 FEB 1900"


@pytest.mark.parametrize(
    "text",
    ["BET 1900 AND 1910", "FROM 1900 TO 1910", "FROM 1900", "TO 1910"],
)
def test_ranges_are_kept_verbatim_and_recognized(text):
    d = parse_date(text)
    assert d.text == text
    assert d.recognized
    assert d.to_gedcom() == text
    assert d.isoformat() is None
    assert d.precision is None


@pytest.mark.parametrize("text", ["Unknown", "31 FEB 1900", "1900-02-30", "1900-13", "13 FOO 1900"])
def test_unrecognized_text_is_kept(text):
    d = parse_date(text)
    assert d.text == text
    assert d.recognized is False
    assert str(d) == text


def test_whitespace_between_date_parts_is_ignored():
    assert parse_date("  12   MAR  1920 ") == GedcomDate(year=1920, month=3, day=12)


def test_verbatim_text_keeps_inner_spacing():
    d = parse_date("  spring  of 1850 ")
    assert d.text == "spring  of 1850"
    assert d.recognized is False


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1985-01-15", GedcomDate(year=1985, month=1, day=15)),
        ("1985-01", GedcomDate(year=1985, month=1)),
        ("ABT 1985-01", GedcomDate(year=1985, month=1, qualifier="ABT")),
        ("2000-02-29", GedcomDate(year=2000, month=2, day=29)),
    ],
)
def test_iso_dates(text, expected):
    assert parse_date(text) == expected


def test_iso_rendering():
    d = GedcomDate(year=1985, month=1, day=15)
    assert d.to_gedcom(iso=True) == "1985-01-15"
    assert d.to_gedcom() == "15 JAN 1985"
    assert GedcomDate(year=1900, qualifier="BEF").to_gedcom(iso=True) == "BEF 1900"
    assert GedcomDate(text="FROM 1900 TO 1910").to_gedcom(iso=True) == "FROM 1900 TO 1910"


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_input_returns_none(text):
    assert parse_date(text) is None
