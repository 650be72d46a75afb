"""Render structured citation records in the supported styles."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .dates import (
    format_day_month_year,
    format_month_day_year,
    format_year_month_day,
    month_name,
    parse_iso_date,
)
from .models import (
    CitationFormatOptions,
    CitationFormatResult,
    CitationInput,
    CitationName,
    CitationSourceType,
    CitationStyle,
    DateParts,
)
from .names import authors_apa, authors_chicago, authors_gbt, authors_ieee, authors_mla
from .normalization import compact, doi_url, normalize_doi, normalize_url, strip_trailing_punctuation
from .validation import validate_citation_input

logger = logging.getLogger(__name__)

_SENTENCE_END = re.compile(r"[.!?。！？]$")
_QUOTED = re.compile(r'^["“].*["”]$', re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


def with_period(value: str) -> str:
    """Terminate a segment with a period unless it already ends a sentence."""
    text = value.strip()
    if not text:
        return ""
    return text if _SENTENCE_END.search(text) else f"{text}."


def quote_if_needed(value: str) -> str:
    text = value.strip()
    if not text:
        return ""
    if _QUOTED.match(text):
        return text
    return f'"{text}"'


def join_segments(parts: List[str]) -> str:
    return _WHITESPACE.sub(" ", " ".join(part for part in parts if part)).strip()


@dataclass
class _Fields:
    """Normalized view of a :class:`CitationInput` used by the style renderers."""

    authors: List[CitationName] = field(default_factory=list)
    title: str = ""
    container_title: str = ""
    publisher: str = ""
    volume: str = ""
    issue: str = ""
    pages: str = ""
    url: str = ""
    doi: str = ""
    published: Optional[DateParts] = None
    accessed: Optional[DateParts] = None

    @classmethod
    def from_input(cls, entry: CitationInput) -> "_Fields":
        return cls(
            authors=list(entry.authors),
            title=compact(entry.title),
            container_title=compact(entry.container_title),
            publisher=compact(entry.publisher),
            volume=compact(entry.volume),
            issue=compact(entry.issue),
            pages=compact(entry.pages),
            url=normalize_url(entry.url),
            doi=normalize_doi(entry.doi),
            published=parse_iso_date(entry.published_date),
            accessed=parse_iso_date(entry.access_date),
        )

    @property
    def link(self) -> str:
        return doi_url(self.doi) if self.doi else self.url

    @property
    def year(self) -> str:
        return str(self.published.year) if self.published else ""


class CitationFormatter:
    """Format citation records into the five supported styles.

    Each style has one renderer per source type, registered in
    :attr:`renderers` under its ``(style, source type)`` key. Renderers only
    build text; missing-field warnings come from :func:`validate_citation_input`.
    """

    def __init__(self, options: CitationFormatOptions):
        self.options = options
        self.renderers: Dict[Tuple[CitationStyle, CitationSourceType], Callable[[_Fields], str]] = {
            (CitationStyle.APA7, CitationSourceType.JOURNAL): self.format_apa7_journal,
            (CitationStyle.APA7, CitationSourceType.BOOK): self.format_apa7_book,
            (CitationStyle.APA7, CitationSourceType.WEBSITE): self.format_apa7_website,
            (CitationStyle.MLA9, CitationSourceType.JOURNAL): self.format_mla9_journal,
            (CitationStyle.MLA9, CitationSourceType.BOOK): self.format_mla9_book,
            (CitationStyle.MLA9, CitationSourceType.WEBSITE): self.format_mla9_website,
            (CitationStyle.CHICAGO, CitationSourceType.JOURNAL): self.format_chicago_journal,
            (CitationStyle.CHICAGO, CitationSourceType.BOOK): self.format_chicago_book,
            (CitationStyle.CHICAGO, CitationSourceType.WEBSITE): self.format_chicago_website,
            (CitationStyle.IEEE, CitationSourceType.JOURNAL): self.format_ieee_journal,
            (CitationStyle.IEEE, CitationSourceType.BOOK): self.format_ieee_book,
            (CitationStyle.IEEE, CitationSourceType.WEBSITE): self.format_ieee_website,
            (CitationStyle.GBT7714, CitationSourceType.JOURNAL): self.format_gbt7714_journal,
            (CitationStyle.GBT7714, CitationSourceType.BOOK): self.format_gbt7714_book,
            (CitationStyle.GBT7714, CitationSourceType.WEBSITE): self.format_gbt7714_website,
        }

    def format(self, entry: CitationInput) -> CitationFormatResult:
        renderer = self.renderer_for(CitationStyle(entry.style), CitationSourceType(entry.source_type))
        citation = renderer(_Fields.from_input(entry))
        warnings = validate_citation_input(entry)
        logger.debug("Formatted %s/%s citation: %s", entry.style, entry.source_type, citation)
        return CitationFormatResult(citation=citation, warnings=warnings)

    def renderer_for(
        self, style: CitationStyle, source_type: CitationSourceType
    ) -> Callable[[_Fields], str]:
        return self.renderers[(style, source_type)]

    # APA 7

    def _apa_date(self, published: Optional[DateParts]) -> str:
        if not published:
            return "(n.d.)."
        if published.month and published.day:
            name = month_name(published.month, self.options.month_names_long)
            return f"({published.year}, {name} {published.day})."
        if published.month:
            return f"({published.year}, {month_name(published.month, self.options.month_names_long)})."
        return f"({published.year})."

    def format_apa7_journal(self, f: _Fields) -> str:
        parts = [with_period(authors_apa(f.authors)), self._apa_date(f.published), with_period(f.title)]
        if f.container_title:
            if f.volume and f.issue:
                vol_issue = f"{f.volume}({f.issue})"
            elif f.volume:
                vol_issue = f.volume
            elif f.issue:
                vol_issue = f"({f.issue})"
            else:
                vol_issue = ""
            container = ", ".join(bit for bit in (f.container_title, vol_issue) if bit)
            parts.append(with_period(", ".join(bit for bit in (container, f.pages) if bit)))
        parts.append(f.link)
        return join_segments(parts)

    def format_apa7_book(self, f: _Fields) -> str:
        parts = [
            with_period(authors_apa(f.authors)),
            self._apa_date(f.published),
            with_period(f.title),
            with_period(f.publisher),
            f.link,
        ]
        return join_segments(parts)

    def format_apa7_website(self, f: _Fields) -> str:
        parts = [
            with_period(authors_apa(f.authors)),
            self._apa_date(f.published),
            with_period(f.title),
            with_period(f.container_title),
            f.link,
        ]
        return join_segments(parts)

    # MLA 9

    def _mla_date(self, date: Optional[DateParts]) -> str:
        return format_day_month_year(date, self.options.month_names_short) if date else ""

    def format_mla9_journal(self, f: _Fields) -> str:
        details = ", ".join(
            bit
            for bit in (
                f"vol. {f.volume}" if f.volume else "",
                f"no. {f.issue}" if f.issue else "",
                f.year,
                f"pp. {f.pages}" if f.pages else "",
            )
            if bit
        )
        parts = [
            with_period(authors_mla(f.authors)),
            with_period(quote_if_needed(f.title)),
            with_period(f.container_title),
            with_period(details),
            with_period(f.link),
        ]
        return join_segments(parts)

    def format_mla9_book(self, f: _Fields) -> str:
        return self._publisher_book(f, authors_mla(f.authors), with_period(f.link))

    def format_mla9_website(self, f: _Fields) -> str:
        accessed = self._mla_date(f.accessed)
        parts = [
            with_period(authors_mla(f.authors)),
            with_period(quote_if_needed(f.title)),
            with_period(f.container_title),
            with_period(self._mla_date(f.published)),
            with_period(f.link),
            with_period(f"{self.options.accessed_label} {accessed}") if accessed else "",
        ]
        return join_segments(parts)

    # Chicago

    def _chicago_date(self, date: Optional[DateParts]) -> str:
        return format_month_day_year(date, self.options.month_names_long) if date else ""

    def format_chicago_journal(self, f: _Fields) -> str:
        parts = [with_period(authors_chicago(f.authors)), with_period(quote_if_needed(f.title))]
        if f.container_title:
            if f.volume and f.issue:
                vol_issue = f"{f.volume}, no. {f.issue}"
            elif f.volume:
                vol_issue = f.volume
            elif f.issue:
                vol_issue = f"no. {f.issue}"
            else:
                vol_issue = ""
            year = f"({f.year})" if f.year else ""
            container = " ".join(bit for bit in (f.container_title, vol_issue, year) if bit).strip()
            parts.append(f"{container}:")
        parts.append(with_period(f.pages))
        parts.append(with_period(f.link))
        return re.sub(r"\s+:\s+", ": ", join_segments(parts))

    def format_chicago_book(self, f: _Fields) -> str:
        return self._publisher_book(f, authors_chicago(f.authors), with_period(f.link))

    def format_chicago_website(self, f: _Fields) -> str:
        accessed = self._chicago_date(f.accessed)
        parts = [
            with_period(authors_chicago(f.authors)),
            with_period(quote_if_needed(f.title)),
            with_period(f.container_title),
            with_period(self._chicago_date(f.published)),
            with_period(f.link),
            with_period(f"{self.options.accessed_label} {accessed}") if accessed else "",
        ]
        return join_segments(parts)

    # IEEE

    def _ieee_date(self, date: Optional[DateParts]) -> str:
        return format_month_day_year(date, self.options.month_names_short) if date else ""

    @staticmethod
    def _ieee_locator(f: _Fields) -> str:
        if f.doi:
            return with_period(f"doi: {f.doi}")
        return with_period(f.url)

    def format_ieee_journal(self, f: _Fields) -> str:
        details = ", ".join(
            bit
            for bit in (
                f"vol. {f.volume}" if f.volume else "",
                f"no. {f.issue}" if f.issue else "",
                f"pp. {f.pages}" if f.pages else "",
                f.year,
            )
            if bit
        )
        parts = [
            with_period(authors_ieee(f.authors)),
            with_period(quote_if_needed(f.title)),
            with_period(f.container_title),
            with_period(details),
            self._ieee_locator(f),
        ]
        return join_segments(parts)

    def format_ieee_book(self, f: _Fields) -> str:
        return self._publisher_book(f, authors_ieee(f.authors), self._ieee_locator(f))

    def format_ieee_website(self, f: _Fields) -> str:
        accessed = self._ieee_date(f.accessed)
        online = ""
        if f.link:
            online = with_period(f"[{self.options.online_label}]. {self.options.available_label}: {f.link}")
        parts = [
            with_period(authors_ieee(f.authors)),
            with_period(quote_if_needed(f.title)),
            with_period(f.container_title),
            with_period(self._ieee_date(f.published)),
            online,
            with_period(f"{self.options.accessed_label}: {accessed}") if accessed else "",
        ]
        return join_segments(parts)

    # GB/T 7714

    @staticmethod
    def _gbt_title(title: str, marker: str) -> str:
        return with_period(f"{strip_trailing_punctuation(title)}[{marker}]") if title else ""

    @staticmethod
    def _gbt_locator(f: _Fields) -> str:
        if f.doi:
            return with_period(f"DOI: {f.doi}")
        return with_period(f.url)

    def format_gbt7714_journal(self, f: _Fields) -> str:
        parts = [with_period(authors_gbt(f.authors)), self._gbt_title(f.title, "J")]
        if f.container_title:
            if f.volume and f.issue:
                vol_issue = f"{f.volume}({f.issue})"
            elif f.volume:
                vol_issue = f.volume
            elif f.issue:
                vol_issue = f"({f.issue})"
            else:
                vol_issue = ""
            tail = ", ".join(
                bit for bit in (f.container_title, f.year, vol_issue, f":{f.pages}" if f.pages else "") if bit
            )
            parts.append(with_period(tail))
        parts.append(self._gbt_locator(f))
        return join_segments(parts)

    def format_gbt7714_book(self, f: _Fields) -> str:
        parts = [
            with_period(authors_gbt(f.authors)),
            self._gbt_title(f.title, "M"),
            with_period(", ".join(bit for bit in (f.publisher, f.year) if bit)),
            self._gbt_locator(f),
        ]
        return join_segments(parts)

    def format_gbt7714_website(self, f: _Fields) -> str:
        published = format_year_month_day(f.published) if f.published else ""
        accessed = format_year_month_day(f.accessed) if f.accessed else ""
        parts = [
            with_period(authors_gbt(f.authors)),
            self._gbt_title(f.title, "EB/OL"),
            with_period(f.container_title),
            with_period(f"({published})") if published else "",
            with_period(f.link),
            with_period(f"[{self.options.accessed_label}: {accessed}]") if accessed else "",
        ]
        return join_segments(parts)

    # Shared

    @staticmethod
    def _publisher_book(f: _Fields, authors: str, locator: str) -> str:
        """Book layout shared by MLA, Chicago and IEEE: authors, title, publisher and year."""
        parts = [
            with_period(authors),
            with_period(f.title),
            with_period(", ".join(bit for bit in (f.publisher, f.year) if bit)),
            locator,
        ]
        return join_segments(parts)
