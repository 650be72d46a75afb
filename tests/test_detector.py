import pytest

from citation_engine import detect_citation_style
from citation_engine.detector import FEATURES, UNKNOWN_THRESHOLD, StyleDetector, clamp01
from citation_engine.models import UNKNOWN_STYLE, CitationStyle


def test_empty_text_is_unknown():
    for raw in ("", "   ", "[3]"):
        detection = detect_citation_style(raw)
        assert detection.style == UNKNOWN_STYLE
        assert detection.confidence == 0.0


def test_weak_evidence_is_unknown_with_top_score_as_confidence():
    detection = detect_citation_style("Some notes about engines. Accessed later.")

    assert detection.is_unknown
    assert detection.confidence == pytest.approx(0.15)


def test_ieee_index_marker_counts():
    detection = detect_citation_style('[1] J. Smith, "A Study," IEEE Trans., vol. 5, no. 2, pp. 1-9, 2020.')

    assert detection.style == CitationStyle.IEEE
    assert detection.scores["ieee"] == pytest.approx(0.95)
    assert detection.confidence == pytest.approx(1.0)


def test_numbered_apa_entry_leans_ieee_with_low_confidence():
    numbered = detect_citation_style("[1] Smith, J. (2020). Title. Journal, 1(2), 3-4.")
    plain = detect_citation_style("Smith, J. (2020). Title. Journal, 1(2), 3-4.")

    assert numbered.style == CitationStyle.IEEE
    assert numbered.scores["ieee"] == pytest.approx(0.6)
    assert numbered.scores["apa7"] == pytest.approx(0.55)
    assert numbered.confidence == pytest.approx(0.05 / 0.6)
    assert plain.style == CitationStyle.APA7


def test_gbt_marker_dominates():
    detection = StyleDetector().detect("Smith J. Web page[EB/OL]. (2020-01-01). https://example.org.")
    ranked = sorted(detection.scores.items(), key=lambda item: item[1], reverse=True)

    assert detection.style == CitationStyle.GBT7714
    assert ranked[0][0] == "gbt7714"
    assert ranked[0][1] >= 0.9


def test_apa_year_and_ampersand():
    detection = detect_citation_style("Smith, J. & Doe, A. (2020). Title of work. Journal, 1(2), 3-4.")

    assert detection.style == CitationStyle.APA7
    assert detection.scores["apa7"] == pytest.approx(0.7)
    assert detection.confidence == pytest.approx(1.0)


def test_mla_day_month_year_beats_chicago_accessed():
    detection = detect_citation_style(
        'Smith, John. "Title." Site, 5 Mar. 2020, example.org. Accessed 6 Jan. 2021.'
    )

    assert detection.style == CitationStyle.MLA9
    assert detection.confidence == pytest.approx(0.75)


def test_chicago_month_day_year():
    detection = detect_citation_style('Smith, John. "Title." Site. March 5, 2020. Accessed January 6, 2021.')

    assert detection.style == CitationStyle.CHICAGO
    assert detection.confidence == pytest.approx(0.75)


def test_scores_cover_every_style():
    scores = StyleDetector().score("Anything at all")

    assert set(scores) == set(CitationStyle)
    assert all(value == 0.0 for value in scores.values())


def test_threshold_is_configurable():
    raw = "Some notes about engines. Accessed later."

    assert StyleDetector(threshold=0.1).detect(raw).style == CitationStyle.MLA9
    assert UNKNOWN_THRESHOLD == 0.35


def test_feature_table_shape():
    names = [feature.name for feature in FEATURES]

    assert len(names) == len(set(names))
    assert FEATURES[0].style == CitationStyle.GBT7714 and FEATURES[0].weight == 0.9


def test_clamp01():
    assert clamp01(-0.5) == 0.0
    assert clamp01(1.5) == 1.0
    assert clamp01(0.25) == 0.25
