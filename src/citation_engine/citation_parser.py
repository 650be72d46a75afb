"""Recover structured fields from freeform citation text."""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .dates import normalize_date_token
from .detector import StyleDetector
from .models import (
    UNKNOWN_STYLE,
    CitationSourceType,
    CitationStyle,
    CitationStyleDetection,
    DetectedStyle,
    ParsedCitationFields,
)
from .names import parse_authors
from .normalization import clean_citation_text, compact, normalize_doi, normalize_url, strip_trailing_punctuation
from .source_types import classify_source_type, has_gbt_marker

logger = logging.getLogger(__name__)

_YEAR = r"(?:18\d{2}|19\d{2}|20\d{2})"
_NAME_CHARS = r"A-Za-zÀ-ÖØ-öø-ÿ' -"
_MONTHS = {
    name[:3]: number
    for number, name in enumerate(
        (
            "january", "february", "march", "april", "may", "june",
            "july", "august", "september", "october", "november", "december",
        ),
        start=1,
    )
}


class CitationParser:
    """Parse a single citation string into :class:`ParsedCitationFields`.

    Extraction is pattern based and style aware. A pattern that does not match
    leaves its field as an empty string; nothing here raises on odd input.
    """

    DOI_PATTERN = re.compile(r"(?:doi:\s*|doi\.org/)(10\.\S+)", re.IGNORECASE)
    DOI_TRAILING = re.compile(r"[)\].,;]+$")
    URL_PATTERN = re.compile(r"https?://[^\s)]+", re.IGNORECASE)
    YEAR_PATTERN = re.compile(rf"\b({_YEAR})\b")
    APA_YEAR_PATTERN = re.compile(rf"\(({_YEAR})[a-z]?(?:,[^)]*)?\)", re.IGNORECASE)

    ACCESSED_PATTERN = re.compile(r"(?:\baccessed\b|访问于)\s*[:：]?\s*", re.IGNORECASE)
    ACCESSED_WINDOW = 40
    ACCESSED_END_PATTERN = re.compile(
        r"[;\]。]|(?<!\b(?:Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Oct|Nov|Dec))\.(?=\s|$)", re.IGNORECASE
    )
    NUMERIC_DATE_PATTERN = re.compile(r"\b(\d{4}[/-]\d{1,2}(?:[/-]\d{1,2})?)\b")
    PROSE_DMY_PATTERN = re.compile(r"\b(\d{1,2})\s+([A-Za-z]{3,9})\.?\s+(\d{4})\b")
    PROSE_MDY_PATTERN = re.compile(r"\b([A-Za-z]{3,9})\.?\s+(\d{1,2}),\s+(\d{4})\b")

    VOLUME_PATTERN = re.compile(r"\bvol\.\s*(\d+)", re.IGNORECASE)
    ISSUE_PATTERN = re.compile(r"\bno\.\s*(\d+)", re.IGNORECASE)
    PAGES_PATTERN = re.compile(r"\bpp\.\s*([\d–-]+)\b", re.IGNORECASE)
    GBT_VOLUME_ISSUE_PATTERN = re.compile(r"\b(\d+)\s*\(\s*(\d+)\s*\)")
    GBT_PAGES_PATTERN = re.compile(r"(?<=[\s,)\]\d]):\s*([\d–-]+)\b")
    APA_VOLUME_ISSUE_PATTERN = re.compile(r",\s*(\d+)\s*\(\s*(\d+)\s*\)(?:,\s*([\d–-]+))?")
    CHICAGO_VOLUME_PATTERN = re.compile(r"\b(\d+),\s*no\.\s*(\d+)", re.IGNORECASE)
    CHICAGO_PAGES_PATTERN = re.compile(rf"\({_YEAR}\):\s*([\d–-]+)")

    QUOTED_TITLE_PATTERN = re.compile(r'"([^"]{2,300})"')
    GBT_TITLE_PATTERN = re.compile(r"\.\s*([^\[]+?)\s*\[(?:J|M|EB/OL)\]", re.IGNORECASE)
    GBT_LEADING_TITLE_PATTERN = re.compile(r"^([^\[.]+?)\s*\[(?:J|M|EB/OL)\]", re.IGNORECASE)
    APA_TITLE_PATTERN = re.compile(r"\)\.\s*([^.]{2,300}?)\.")
    SENTENCE_BREAK = re.compile(r"(?<!\b[A-Z])\.\s+")
    INITIAL_PATTERN = re.compile(r"\b[A-Z]\.")

    APA_AUTHOR_PATTERN = re.compile(rf"([{_NAME_CHARS}]+),\s*([A-Z]\.?(?:[\s-]*[A-Z]\.)*)")
    IEEE_AUTHOR_PATTERN = re.compile(rf"((?:[A-Z]\.\s*){{1,3}})([{_NAME_CHARS}]{{2,80}})")
    GBT_AUTHOR_PATTERN = re.compile(r"^(.+?)\s+([A-Z]{1,6})$")
    ET_AL_PATTERN = re.compile(r"\bet al\.?", re.IGNORECASE)

    GBT_CONTAINER_PATTERN = re.compile(r"\[(?:J|EB/OL)\]\.\s*([^,，.]+)[,，]", re.IGNORECASE)
    CHICAGO_CONTAINER_PATTERN = re.compile(r'"\s*[,.]?\s*([^,"]+?)\s+\d+(?:,\s*no\.|\s*\()', re.IGNORECASE)
    QUOTED_CONTAINER_PATTERN = re.compile(r'"\s*[,.]?\s*([^,"]+?)[,.]\s*(?:vol\.|no\.|pp\.)', re.IGNORECASE)
    APA_CONTAINER_PATTERN = re.compile(r"\)\.\s*[^.]+\.\s*([^,]+),\s*\d+")
    AFTER_TITLE_CONTAINER_PATTERN = re.compile(r"^[\"'\s.,]*([^,.]+)[,.]")
    PUBLISHER_PATTERN = re.compile(rf"^[\"'\s.]*(?:\[[^\]]*\][\s.]*)?([^,.]+?),\s*{_YEAR}\b")

    def __init__(self, detector: StyleDetector | None = None):
        self.detector = detector or StyleDetector()

    def parse(self, raw: str, preferred_style: CitationStyle | None = None) -> ParsedCitationFields:
        text = clean_citation_text(raw)
        if not text:
            return ParsedCitationFields(style=UNKNOWN_STYLE)

        if preferred_style is not None:
            detection = CitationStyleDetection(style=CitationStyle(preferred_style), confidence=1.0)
        else:
            detection = self.detector.detect(raw)
        style = detection.style
        logger.debug("Parsing citation as %s (confidence %.2f)", style, detection.confidence)

        doi = self._extract_doi(text)
        url = "" if doi else normalize_url(self._extract_url(text))
        source_type = classify_source_type(text)
        title = self._extract_title(text, style)
        volume, issue, pages = self._extract_volume_issue_pages(text, style)
        publisher = self._extract_publisher(text, title, source_type)
        container_title = self._extract_container(text, title, style)
        if publisher and container_title == publisher:
            container_title = ""

        return ParsedCitationFields(
            style=style,
            confidence=detection.confidence,
            source_type=source_type,
            authors_raw=self._extract_authors(text, style),
            title=title,
            container_title=container_title,
            publisher=publisher,
            published_date=self._extract_published_date(text, style),
            access_date=self._extract_access_date(text),
            volume=volume,
            issue=issue,
            pages=pages,
            url=url,
            doi=doi,
        )

    def _extract_doi(self, text: str) -> str:
        match = self.DOI_PATTERN.search(text)
        if not match:
            return ""
        return normalize_doi(self.DOI_TRAILING.sub("", match.group(1)))

    def _extract_url(self, text: str) -> str:
        matches = self.URL_PATTERN.findall(text)
        return strip_trailing_punctuation(matches[-1]) if matches else ""

    def _extract_published_date(self, text: str, style: DetectedStyle) -> str:
        if style == CitationStyle.APA7:
            match = self.APA_YEAR_PATTERN.search(text)
            return match.group(1) if match else ""
        match = self.YEAR_PATTERN.search(text)
        return match.group(1) if match else ""

    def _extract_access_date(self, text: str) -> str:
        match = self.ACCESSED_PATTERN.search(text)
        if not match:
            return ""
        window = text[match.end(): match.end() + self.ACCESSED_WINDOW]
        end = self.ACCESSED_END_PATTERN.search(window)
        if end:
            window = window[: end.start()]

        numeric = self.NUMERIC_DATE_PATTERN.search(window)
        if numeric:
            return normalize_date_token(numeric.group(1))
        prose = self._parse_prose_date(window)
        if prose:
            return prose
        year = self.YEAR_PATTERN.search(window)
        return year.group(1) if year else ""

    def _parse_prose_date(self, window: str) -> str:
        match = self.PROSE_DMY_PATTERN.search(window)
        if match:
            day, month_text, year = match.groups()
        else:
            match = self.PROSE_MDY_PATTERN.search(window)
            if not match:
                return ""
            month_text, day, year = match.groups()
        month = _MONTHS.get(month_text[:3].lower())
        if not month or not 1 <= int(day) <= 31:
            return ""
        return f"{year}-{month:02d}-{int(day):02d}"

    def _extract_volume_issue_pages(self, text: str, style: DetectedStyle) -> Tuple[str, str, str]:
        if has_gbt_marker(text):
            match = self.GBT_VOLUME_ISSUE_PATTERN.search(text)
            volume, issue = (match.group(1), match.group(2)) if match else ("", "")
            return volume, issue, _first_group(self.GBT_PAGES_PATTERN, text)

        volume = _first_group(self.VOLUME_PATTERN, text)
        issue = _first_group(self.ISSUE_PATTERN, text)
        pages = _first_group(self.PAGES_PATTERN, text)

        if style == CitationStyle.APA7 and not (volume or issue or pages):
            match = self.APA_VOLUME_ISSUE_PATTERN.search(text)
            if match:
                volume, issue, pages = match.group(1), match.group(2), match.group(3) or ""
        elif style == CitationStyle.CHICAGO and not volume:
            match = self.CHICAGO_VOLUME_PATTERN.search(text)
            if match:
                volume, issue = match.group(1), issue or match.group(2)
            pages = pages or _first_group(self.CHICAGO_PAGES_PATTERN, text)
        return volume, issue, pages

    def _extract_title(self, text: str, style: DetectedStyle) -> str:
        match = self.QUOTED_TITLE_PATTERN.search(text)
        if match:
            return strip_trailing_punctuation(match.group(1))
        match = self.GBT_TITLE_PATTERN.search(text) or self.GBT_LEADING_TITLE_PATTERN.search(text)
        if match:
            return strip_trailing_punctuation(match.group(1))
        match = self.APA_TITLE_PATTERN.search(text)
        if match:
            return strip_trailing_punctuation(match.group(1))
        if style == CitationStyle.GBT7714:
            return ""
        return self._title_after_authors(text)

    def _title_after_authors(self, text: str) -> str:
        """Unquoted titles: the sentence after the author sentence, or the first one."""
        sentences = self._sentences(text)
        if len(sentences) < 2:
            return ""
        first, second = sentences[0], sentences[1]
        # "Publisher, YEAR" right after the first sentence means there is no author sentence.
        has_authors = self._looks_like_author_sentence(first) and not self.PUBLISHER_PATTERN.match(second)
        candidate = second if has_authors else first
        candidate = strip_trailing_punctuation(candidate)
        return candidate if 2 <= len(candidate) <= 300 else ""

    def _sentences(self, text: str) -> List[str]:
        return [part.strip() for part in self.SENTENCE_BREAK.split(text) if part.strip()]

    def _looks_like_author_sentence(self, sentence: str) -> bool:
        return "," in sentence or self.INITIAL_PATTERN.search(sentence) is not None

    def _extract_authors(self, text: str, style: DetectedStyle) -> str:
        if style == CitationStyle.APA7:
            names = self._authors_from_apa_segment(text.split("(")[0])
            if names:
                return "\n".join(names)
        if style == CitationStyle.IEEE:
            segment = text.split('"')[0] if '"' in text else self._first_sentence(text)
            names = self._authors_from_ieee_segment(segment)
            if names:
                return "\n".join(names)
        if style == CitationStyle.GBT7714:
            names = self._authors_from_gbt_segment(text.split(".")[0].strip())
            if names:
                return "\n".join(names)

        segment = self.ET_AL_PATTERN.sub("", self._first_sentence(text))
        segment = re.sub(r"\s+and\s+", "\n", segment, flags=re.IGNORECASE)
        segment = re.sub(r"\s*&\s*", "\n", segment)
        segment = re.sub(r";\s*", "\n", segment)
        return "\n".join(name.inverted() for name in parse_authors(segment))

    def _first_sentence(self, text: str) -> str:
        sentences = self._sentences(text)
        return strip_trailing_punctuation(sentences[0]) if sentences else ""

    def _authors_from_apa_segment(self, segment: str) -> List[str]:
        names = []
        for match in self.APA_AUTHOR_PATTERN.finditer(segment):
            family = compact(match.group(1))
            given = compact(match.group(2))
            if family:
                names.append(f"{family}, {given}".strip())
        return names

    def _authors_from_ieee_segment(self, segment: str) -> List[str]:
        cleaned = re.sub(r"^\[\d+\]\s*", "", segment)
        cleaned = self.ET_AL_PATTERN.sub("", cleaned)
        cleaned = re.sub(r"\band\b", ",", cleaned, flags=re.IGNORECASE).replace("&", ",")
        names = []
        for match in self.IEEE_AUTHOR_PATTERN.finditer(cleaned):
            given = compact(match.group(1))
            family = compact(match.group(2))
            if family:
                names.append(f"{family}, {given}".strip())
        return names

    def _authors_from_gbt_segment(self, segment: str) -> List[str]:
        cleaned = self.ET_AL_PATTERN.sub("", segment)
        names = []
        for part in (compact(p) for p in re.split(r"[,，;]", cleaned)):
            match = self.GBT_AUTHOR_PATTERN.match(part) if part else None
            if match:
                names.append(f"{compact(match.group(1))}, {match.group(2)}")
        return names

    def _extract_container(self, text: str, title: str, style: DetectedStyle) -> str:
        patterns = [self.GBT_CONTAINER_PATTERN]
        if style == CitationStyle.CHICAGO:
            patterns.append(self.CHICAGO_CONTAINER_PATTERN)
        patterns.extend([self.QUOTED_CONTAINER_PATTERN, self.APA_CONTAINER_PATTERN])
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                return strip_trailing_punctuation(match.group(1))

        if not title or title not in text:
            return ""
        after_title = text.split(title, 1)[1]
        match = self.AFTER_TITLE_CONTAINER_PATTERN.match(after_title)
        return strip_trailing_punctuation(match.group(1)) if match else ""

    def _extract_publisher(self, text: str, title: str, source_type: Optional[CitationSourceType]) -> str:
        if source_type not in (None, CitationSourceType.BOOK):
            return ""
        if not title or title not in text:
            return ""
        match = self.PUBLISHER_PATTERN.match(text.split(title, 1)[1])
        return strip_trailing_punctuation(match.group(1)) if match else ""


def _first_group(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def parse_citation(raw: str, preferred_style: CitationStyle | None = None) -> ParsedCitationFields:
    return CitationParser().parse(raw, preferred_style)
