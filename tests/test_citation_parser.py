import pytest

from citation_engine import format_citation, parse_citation
from citation_engine.citation_parser import CitationParser
from citation_engine.models import UNKNOWN_STYLE, CitationSourceType, CitationStyle


@pytest.fixture()
def parser():
    return CitationParser()


def test_ieee_journal_fields(parser):
    fields = parser.parse('[1] J. Smith, "A Study," IEEE Trans., vol. 5, no. 2, pp. 1-9, 2020.')

    assert fields.style == CitationStyle.IEEE
    assert fields.volume == "5"
    assert fields.issue == "2"
    assert fields.pages == "1-9"
    assert fields.title == "A Study"
    assert fields.authors_raw == "Smith, J."
    assert fields.container_title == "IEEE Trans"
    assert fields.published_date == "2020"
    assert fields.source_type == CitationSourceType.JOURNAL


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_input_returns_unknown_with_absent_fields(parser, raw):
    fields = parser.parse(raw)

    assert fields.style == UNKNOWN_STYLE
    assert fields.confidence == 0.0
    assert fields.title is None
    assert fields.authors_raw is None
    assert fields.doi is None


def test_unmatched_fields_are_empty_strings(parser):
    fields = parser.parse("Completely unstructured remark")

    assert fields.style == UNKNOWN_STYLE
    assert fields.volume == ""
    assert fields.doi == ""
    assert fields.access_date == ""


def test_gbt_journal_fields(parser):
    fields = parser.parse(
        "Lovelace A, Babbage C. On the Analytical Engine[J]. Annals of Computing, 2020, 12(3), :45-67. "
        "DOI: 10.1234/engine.2020."
    )

    assert fields.style == CitationStyle.GBT7714
    assert fields.authors_raw == "Lovelace, A\nBabbage, C"
    assert fields.title == "On the Analytical Engine"
    assert fields.container_title == "Annals of Computing"
    assert (fields.volume, fields.issue, fields.pages) == ("12", "3", "45-67")
    assert fields.doi == "10.1234/engine.2020"
    assert fields.url == ""


def test_gbt_website_access_date(parser):
    fields = parser.parse(
        "国家统计局. 统计公报[EB/OL]. (2021-02-28). https://stats.example.cn/gb. [访问于: 2024/3/9]."
    )

    assert fields.style == CitationStyle.GBT7714
    assert fields.source_type == CitationSourceType.WEBSITE
    assert fields.title == "统计公报"
    assert fields.url == "https://stats.example.cn/gb"
    assert fields.access_date == "2024-03-09"
    assert fields.pages == ""


def test_apa_journal_fields(parser):
    fields = parser.parse(
        "Lovelace, A. & Babbage, C. (2020). On the Analytical Engine. Annals of Computing, 12(3), 45-67. "
        "https://doi.org/10.1234/engine.2020"
    )

    assert fields.style == CitationStyle.APA7
    assert fields.authors_raw == "Lovelace, A.\nBabbage, C."
    assert fields.title == "On the Analytical Engine"
    assert fields.container_title == "Annals of Computing"
    assert (fields.volume, fields.issue, fields.pages) == ("12", "3", "45-67")
    assert fields.doi == "10.1234/engine.2020"


def test_mla_website_fields(parser):
    fields = parser.parse(
        'Lovelace, Ada. "On the Analytical Engine." Annals of Computing, 5 Mar. 2020, '
        "https://example.org/engine. Accessed 15 Jan. 2024."
    )

    assert fields.style == CitationStyle.MLA9
    assert fields.authors_raw == "Lovelace, Ada"
    assert fields.title == "On the Analytical Engine"
    assert fields.container_title == "Annals of Computing"
    assert fields.url == "https://example.org/engine"
    assert fields.published_date == "2020"
    assert fields.access_date == "2024-01-15"


def test_access_date_stops_at_sentence_end(parser):
    fields = parser.parse('Smith, John. "Title." Site. Page last accessed. Reprinted 2019.', CitationStyle.MLA9)

    assert fields.access_date == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('Doe, J. "Page." Site. Accessed Jan. 15, 2024. Mirror 2019.', "2024-01-15"),
        ('Doe, J. "Page." Site. Accessed: 2024-01-15; archived 2019.', "2024-01-15"),
    ],
)
def test_access_date_window_keeps_abbreviated_months(parser, raw, expected):
    assert parser.parse(raw, CitationStyle.IEEE).access_date == expected


def test_chicago_journal_volume_and_pages(parser):
    fields = parser.parse(
        'Lovelace, Ada. "On the Analytical Engine." Annals of Computing 12, no. 3 (2020): 45-67.',
        preferred_style=CitationStyle.CHICAGO,
    )

    assert fields.confidence == 1.0
    assert fields.container_title == "Annals of Computing"
    assert (fields.volume, fields.issue, fields.pages) == ("12", "3", "45-67")


def test_doi_keeps_full_suffix(parser):
    fields = parser.parse("Doe, J. (2019). Data. doi: 10.1000/abc.def.2019.")

    assert fields.doi == "10.1000/abc.def.2019"


def test_parenthesised_year_is_not_an_index(parser):
    fields = parser.parse("(2019). Data handbook. Example Press.", CitationStyle.APA7)

    assert fields.published_date == "2019"
    assert fields.title == "Data handbook"


def test_book_publisher(parser):
    fields = parser.parse("Lovelace, Ada. On the Analytical Engine. Academic Press, 2020.", CitationStyle.MLA9)

    assert fields.title == "On the Analytical Engine"
    assert fields.publisher == "Academic Press"
    assert fields.container_title == ""


@pytest.mark.parametrize("style", [CitationStyle.MLA9, CitationStyle.CHICAGO, CitationStyle.IEEE])
def test_authorless_book_title_with_comma(make_entry, english_options, style):
    entry = make_entry(style, CitationSourceType.BOOK, title="Graph Theory Basics, Revisited", publisher="Big Press")
    entry.authors = []
    citation = format_citation(entry, english_options).citation

    fields = parse_citation(citation, preferred_style=style)

    assert fields.title == "Graph Theory Basics, Revisited"
    assert fields.publisher == "Big Press"


@pytest.mark.parametrize("with_authors", [True, False])
@pytest.mark.parametrize("style", list(CitationStyle))
@pytest.mark.parametrize("source_type", list(CitationSourceType))
def test_format_then_parse_keeps_title_and_year(make_entry, english_options, style, source_type, with_authors):
    entry = make_entry(style, source_type)
    if not with_authors:
        entry.authors = []
    citation = format_citation(entry, english_options).citation

    fields = parse_citation(citation, preferred_style=style)

    assert fields.title == entry.title
    assert fields.published_date[:4] == entry.published_date[:4]
