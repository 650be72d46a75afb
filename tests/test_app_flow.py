from citation_engine.app import CitationEngine
from citation_engine.locales import CHINESE
from citation_engine.models import (
    UNKNOWN_STYLE,
    CitationSourceType,
    CitationStyle,
    CitationWarningCode,
    ParsedCitationFields,
)
from citation_engine.report import render_format_report, render_parse_report

IEEE_TEXT = '[1] J. Smith, "A Study," IEEE Trans., vol. 5, no. 2, pp. 1-9, 2020.'


def test_convert_ieee_to_apa():
    result = CitationEngine().convert(IEEE_TEXT, CitationStyle.APA7)

    assert result.citation == "Smith, J. (2020). A Study. IEEE Trans, 5(2), 1-9."
    assert result.warnings == {CitationWarningCode.MISSING_URL}


def test_convert_uses_fallback_source_type_without_markers():
    engine = CitationEngine()
    raw = "Lovelace, Ada. On the Analytical Engine. Academic Press, 1843."

    result = engine.convert(raw, CitationStyle.GBT7714, fallback_source_type=CitationSourceType.BOOK)

    assert result.citation == "Lovelace A. On the Analytical Engine[M]. Academic Press, 1843."


def test_parse_many_skips_blank_lines():
    engine = CitationEngine()

    parsed = engine.parse_many([IEEE_TEXT, "", "   ", "Smith J. Page[EB/OL]. https://example.org."])

    assert [fields.style for fields in parsed] == [CitationStyle.IEEE, CitationStyle.GBT7714]


def test_format_many_with_chinese_locale(make_entry):
    engine = CitationEngine(locale="zh")
    entries = [make_entry(CitationStyle.CHICAGO, CitationSourceType.WEBSITE), make_entry(CitationStyle.APA7)]

    results = engine.format_many(entries)

    assert engine.options is CHINESE
    assert "3月 5, 2020." in results[0].citation
    assert results[1].citation.startswith("Lovelace, A. & Babbage, C. (2020, 3月 5).")


def test_to_input_prefers_detected_style_and_source_type():
    fields = ParsedCitationFields(
        style=UNKNOWN_STYLE,
        source_type=None,
        authors_raw="Lovelace, Ada\nBabbage, Charles",
        title="Notes",
    )

    entry = fields.to_input(fallback_source_type=CitationSourceType.BOOK, fallback_style=CitationStyle.MLA9)

    assert entry.style == CitationStyle.MLA9
    assert entry.source_type == CitationSourceType.BOOK
    assert [name.family for name in entry.authors] == ["Lovelace", "Babbage"]
    assert entry.doi == ""


def test_reports(make_entry):
    engine = CitationEngine()
    fields = engine.parse(IEEE_TEXT)
    results = engine.format_many([make_entry(title="")])

    parse_report = render_parse_report(fields)
    format_report = render_format_report(results)

    assert parse_report.splitlines()[0] == "Style: IEEE (confidence 1.00)"
    assert "Source type: journal" in parse_report
    assert "Pages: 1-9" in parse_report
    assert "  [WARNING] missingTitle: Missing title" in format_report
    assert render_format_report([]) == "No citations to format."
