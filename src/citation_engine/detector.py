"""Heuristic citation style detection.

Every feature is an independent regex check that adds a fixed weight to one
style. Scores are summed per style, ranked, and the winner's confidence is its
margin over the runner-up.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Pattern, Tuple

from .models import UNKNOWN_STYLE, CitationStyle, CitationStyleDetection
from .normalization import normalize_citation_text, strip_leading_index

logger = logging.getLogger(__name__)

UNKNOWN_THRESHOLD = 0.35

_ABBREVIATED_MONTHS = r"(?:Jan\.|Feb\.|Mar\.|Apr\.|May|Jun\.|Jul\.|Aug\.|Sep\.|Oct\.|Nov\.|Dec\.)"
_FULL_MONTHS = r"(?:January|February|March|April|May|June|July|August|September|October|November|December)"


@dataclass(frozen=True)
class StyleFeature:
    """A weighted piece of evidence for one style.

    ``patterns`` match against the cleaned text, or against the
    whitespace-normalized text with its enumeration marker still in place when
    ``on_indexed_text`` is set. ``require_all`` turns the default any-match into
    an all-match.
    """

    name: str
    style: CitationStyle
    weight: float
    patterns: Tuple[Pattern[str], ...]
    require_all: bool = False
    on_indexed_text: bool = False

    def matches(self, indexed_text: str, clean_text: str) -> bool:
        text = indexed_text if self.on_indexed_text else clean_text
        hits = (pattern.search(text) is not None for pattern in self.patterns)
        return all(hits) if self.require_all else any(hits)


def _feature(name: str, style: CitationStyle, weight: float, *patterns: str, flags: int = 0, **kwargs) -> StyleFeature:
    compiled = tuple(re.compile(pattern, flags) for pattern in patterns)
    return StyleFeature(name=name, style=style, weight=weight, patterns=compiled, **kwargs)


# Order matters only for floating point summation; keep it stable.
FEATURES: List[StyleFeature] = [
    _feature("gbt-type-marker", CitationStyle.GBT7714, 0.9, r"\[(?:J|M|EB/OL)\]", flags=re.IGNORECASE),
    _feature("gbt-uppercase-doi", CitationStyle.GBT7714, 0.15, r"\bDOI:\s*10\."),
    _feature("ieee-index", CitationStyle.IEEE, 0.6, r"^\s*\[\d+\]\s+", on_indexed_text=True),
    _feature("ieee-online", CitationStyle.IEEE, 0.2, r"\[\s*online\s*\]", r"\bonline\]", flags=re.IGNORECASE),
    _feature("ieee-volume", CitationStyle.IEEE, 0.15, r"\bvol\.\s*\d+", flags=re.IGNORECASE),
    _feature("ieee-number", CitationStyle.IEEE, 0.1, r"\bno\.\s*\d+", flags=re.IGNORECASE),
    _feature("ieee-pages", CitationStyle.IEEE, 0.1, r"\bpp\.\s*[\d-]+", flags=re.IGNORECASE),
    _feature("ieee-doi", CitationStyle.IEEE, 0.15, r"\bdoi:\s*10\.", r"doi\.org/10\.", flags=re.IGNORECASE),
    _feature("apa-year", CitationStyle.APA7, 0.55, r"\(\d{4}[a-z]?\)", flags=re.IGNORECASE),
    _feature("apa-ampersand", CitationStyle.APA7, 0.15, r"\s&\s", r"\b\w+,\s*[A-Z]\.", require_all=True),
    _feature("apa-retrieved-from", CitationStyle.APA7, 0.15, r"\bretrieved from\b", flags=re.IGNORECASE),
    _feature("apa-doi-url", CitationStyle.APA7, 0.1, r"https?://doi\.org/10\.", flags=re.IGNORECASE),
    _feature("mla-accessed", CitationStyle.MLA9, 0.15, r"\baccessed\b", flags=re.IGNORECASE),
    _feature("chicago-accessed", CitationStyle.CHICAGO, 0.15, r"\baccessed\b", flags=re.IGNORECASE),
    _feature("mla-day-month-year", CitationStyle.MLA9, 0.45, rf"\b\d{{1,2}}\s+{_ABBREVIATED_MONTHS}\s+\d{{4}}", flags=re.IGNORECASE),
    _feature("chicago-month-day-year", CitationStyle.CHICAGO, 0.45, rf"\b{_FULL_MONTHS}\s+\d{{1,2}},\s+\d{{4}}", flags=re.IGNORECASE),
]


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class StyleDetector:
    """Score citation text against every style and pick the best separated one."""

    def __init__(self, features: List[StyleFeature] | None = None, threshold: float = UNKNOWN_THRESHOLD):
        self.features = FEATURES if features is None else features
        self.threshold = threshold

    def score(self, raw: str) -> Dict[CitationStyle, float]:
        indexed_text = normalize_citation_text(raw)
        clean_text = strip_leading_index(indexed_text)
        scores: Dict[CitationStyle, float] = {style: 0.0 for style in CitationStyle}
        if not clean_text:
            return scores
        for feature in self.features:
            if feature.matches(indexed_text, clean_text):
                scores[feature.style] += feature.weight
        return scores

    def detect(self, raw: str) -> CitationStyleDetection:
        if not strip_leading_index(normalize_citation_text(raw)):
            return CitationStyleDetection(style=UNKNOWN_STYLE, confidence=0.0)

        scores = self.score(raw)
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
        (top_style, top), (_, second) = ranked[0], ranked[1]
        score_map = {style.value: value for style, value in scores.items()}

        if top <= self.threshold:
            logger.debug("No style above threshold: %s", score_map)
            return CitationStyleDetection(style=UNKNOWN_STYLE, confidence=max(0.0, top), scores=score_map)

        confidence = clamp01((top - second) / max(self.threshold, top))
        logger.debug("Style scores %s -> %s (%.2f)", score_map, top_style.value, confidence)
        return CitationStyleDetection(style=top_style, confidence=confidence, scores=score_map)


def detect_citation_style(raw: str) -> CitationStyleDetection:
    return StyleDetector().detect(raw)
