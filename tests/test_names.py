from citation_engine.models import CitationName
from citation_engine.names import (
    authors_apa,
    authors_chicago,
    authors_gbt,
    authors_ieee,
    authors_mla,
    initials,
    parse_authors,
)


def _people(count):
    return [CitationName(given=f"Given{i}", family=f"Family{i}") for i in range(1, count + 1)]


def test_parse_authors_accepts_lines_and_semicolons():
    names = parse_authors("Lovelace, Ada\nCharles Babbage; Grace Brewster Hopper；Plato")

    assert names == [
        CitationName(given="Ada", family="Lovelace"),
        CitationName(given="Charles", family="Babbage"),
        CitationName(given="Grace Brewster", family="Hopper"),
        CitationName(given="", family="Plato"),
    ]


def test_parse_authors_empty():
    assert parse_authors("") == []
    assert parse_authors(None) == []


def test_initials_split_hyphenated_names():
    assert initials("Jean-Paul") == "J. P."
    assert initials("john ronald") == "J. R."
    assert initials("") == ""


def test_apa_lists_twenty_authors_without_truncation():
    text = authors_apa(_people(20))

    assert "…" not in text
    assert text.endswith("Family19, G., & Family20, G.")
    assert text.count("Family") == 20


def test_apa_truncates_twenty_one_authors():
    text = authors_apa(_people(21))

    assert text.endswith("Family19, G., …, Family21, G.")
    assert "Family20" not in text
    assert "&" not in text


def test_gbt_three_authors_listed_four_truncated():
    assert authors_gbt(_people(3)) == "Family1 G, Family2 G, Family3 G"
    assert authors_gbt(_people(4)) == "Family1 G, Family2 G, Family3 G, et al."


def test_gbt_initials_concatenate():
    assert authors_gbt([CitationName(given="ada king", family="Lovelace")]) == "Lovelace AK"


def test_mla_author_counts():
    ada, charles, grace = _people(3)
    assert authors_mla([ada]) == "Family1, Given1"
    assert authors_mla([ada, charles]) == "Family1, Given1, and Given2 Family2"
    assert authors_mla([ada, charles, grace]) == "Family1, Given1, et al."


def test_chicago_and_ieee_joins():
    assert authors_chicago(_people(2)) == "Family1, Given1 and Given2 Family2"
    assert authors_chicago(_people(3)) == "Family1, Given1, Given2 Family2, and Given3 Family3"
    assert authors_ieee(_people(1)) == "G. Family1"
    assert authors_ieee(_people(2)) == "G. Family1, and G. Family2"


def test_empty_given_name_leaves_no_dangling_comma():
    plato = CitationName(given="", family="Plato")
    assert authors_apa([plato]) == "Plato"
    assert authors_mla([plato]) == "Plato"
