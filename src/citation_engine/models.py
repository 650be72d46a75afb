"""Data models shared by the formatting and parsing pipelines."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union

UNKNOWN_STYLE = "unknown"


class CitationStyle(str, Enum):
    """Supported citation styles."""

    APA7 = "apa7"
    MLA9 = "mla9"
    CHICAGO = "chicago"
    IEEE = "ieee"
    GBT7714 = "gbt7714"

    @classmethod
    def from_string(cls, value: str) -> "CitationStyle":
        """Parse a style name, accepting common aliases."""
        key = " ".join(value.lower().replace("-", " ").split())
        aliases = {
            "apa": cls.APA7,
            "apa 7": cls.APA7,
            "apa7": cls.APA7,
            "mla": cls.MLA9,
            "mla 9": cls.MLA9,
            "mla9": cls.MLA9,
            "chicago": cls.CHICAGO,
            "ieee": cls.IEEE,
            "gbt": cls.GBT7714,
            "gbt7714": cls.GBT7714,
            "gb/t 7714": cls.GBT7714,
            "gb/t7714": cls.GBT7714,
            "gb 7714": cls.GBT7714,
        }
        if key not in aliases:
            raise ValueError(f"Unknown citation style: {value!r}")
        return aliases[key]


class CitationSourceType(str, Enum):
    """Kinds of cited works; each selects a grammar branch."""

    WEBSITE = "website"
    JOURNAL = "journal"
    BOOK = "book"


class CitationWarningCode(str, Enum):
    """Non-fatal signals that a citation was rendered without a recommended field."""

    MISSING_TITLE = "missingTitle"
    MISSING_AUTHORS = "missingAuthors"
    MISSING_CONTAINER = "missingContainer"
    MISSING_PUBLISHER = "missingPublisher"
    MISSING_URL = "missingUrl"
    MISSING_DATE = "missingDate"


DetectedStyle = Union[CitationStyle, str]


@dataclass(frozen=True)
class CitationName:
    """One author or creator."""

    given: str = ""
    family: str = ""

    def inverted(self) -> str:
        return ", ".join(part for part in (self.family, self.given) if part)


@dataclass(frozen=True)
class DateParts:
    year: int
    month: Optional[int] = None
    day: Optional[int] = None


@dataclass
class CitationInput:
    """Structured record consumed by the formatter.

    Text fields are raw form values; trimming and normalization happen inside
    the engine.
    """

    style: CitationStyle = CitationStyle.APA7
    source_type: CitationSourceType = CitationSourceType.WEBSITE
    authors: List[CitationName] = field(default_factory=list)
    title: str = ""
    container_title: str = ""
    publisher: str = ""
    published_date: str = ""
    access_date: str = ""
    volume: str = ""
    issue: str = ""
    pages: str = ""
    url: str = ""
    doi: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CitationInput":
        """Build an input from JSON-like data.

        ``authors`` may be a list of ``{"given", "family"}`` objects, a list of
        strings, or one freeform string; strings go through ``parse_authors``.
        Unknown ``style``/``source_type`` names raise ``ValueError``.
        """
        from .names import parse_authors

        raw_authors = data.get("authors") or []
        if isinstance(raw_authors, str):
            authors = parse_authors(raw_authors)
        else:
            authors = []
            for item in raw_authors:
                if isinstance(item, dict):
                    authors.append(CitationName(given=item.get("given", ""), family=item.get("family", "")))
                else:
                    authors.extend(parse_authors(str(item)))

        text_fields = {
            name: str(data.get(name) or "")
            for name in (
                "title", "container_title", "publisher", "published_date", "access_date",
                "volume", "issue", "pages", "url", "doi",
            )
        }
        return cls(
            style=CitationStyle.from_string(str(data.get("style") or "apa7")),
            source_type=CitationSourceType(str(data.get("source_type") or "website").lower()),
            authors=authors,
            **text_fields,
        )


@dataclass(frozen=True)
class CitationFormatOptions:
    """Locale-dependent text used while rendering citations."""

    month_names_long: List[str]
    month_names_short: List[str]
    accessed_label: str
    retrieved_from_label: str
    online_label: str
    available_label: str


@dataclass(frozen=True)
class CitationFormatResult:
    citation: str
    warnings: FrozenSet[CitationWarningCode] = frozenset()

    def sorted_warnings(self) -> List[CitationWarningCode]:
        """Return warnings in declaration order for stable display."""
        return [code for code in CitationWarningCode if code in self.warnings]


@dataclass(frozen=True)
class CitationStyleDetection:
    """Guessed style with a confidence measuring separation from the runner-up."""

    style: DetectedStyle
    confidence: float
    scores: Dict[str, float] = field(default_factory=dict)

    @property
    def is_unknown(self) -> bool:
        return self.style == UNKNOWN_STYLE


@dataclass
class ParsedCitationFields:
    """Fields recovered from freeform citation text.

    Unmatched fields are empty strings; when the input text is empty every
    field except ``style`` is ``None``.
    """

    style: DetectedStyle = UNKNOWN_STYLE
    confidence: float = 0.0
    source_type: Optional[CitationSourceType] = None
    authors_raw: Optional[str] = None
    title: Optional[str] = None
    container_title: Optional[str] = None
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    access_date: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    url: Optional[str] = None
    doi: Optional[str] = None

    def to_input(
        self,
        style: CitationStyle | None = None,
        fallback_source_type: CitationSourceType = CitationSourceType.WEBSITE,
        fallback_style: CitationStyle = CitationStyle.APA7,
    ) -> CitationInput:
        """Build a formatter input from the recovered fields."""
        from .names import parse_authors

        if style is None:
            style = self.style if isinstance(self.style, CitationStyle) else fallback_style
        return CitationInput(
            style=style,
            source_type=self.source_type or fallback_source_type,
            authors=parse_authors(self.authors_raw or ""),
            title=self.title or "",
            container_title=self.container_title or "",
            publisher=self.publisher or "",
            published_date=self.published_date or "",
            access_date=self.access_date or "",
            volume=self.volume or "",
            issue=self.issue or "",
            pages=self.pages or "",
            url=self.url or "",
            doi=self.doi or "",
        )

    def to_dict(self) -> Dict[str, object]:
        style = self.style.value if isinstance(self.style, CitationStyle) else self.style
        return {
            "style": style,
            "confidence": self.confidence,
            "source_type": self.source_type.value if self.source_type else None,
            "authors_raw": self.authors_raw,
            "title": self.title,
            "container_title": self.container_title,
            "publisher": self.publisher,
            "published_date": self.published_date,
            "access_date": self.access_date,
            "volume": self.volume,
            "issue": self.issue,
            "pages": self.pages,
            "url": self.url,
            "doi": self.doi,
        }
