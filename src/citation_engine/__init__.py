"""Citation formatting, style detection and field extraction toolkit."""
from __future__ import annotations

from .app import CitationEngine
from .citation_parser import CitationParser, parse_citation
from .detector import StyleDetector, detect_citation_style
from .formatter import CitationFormatter
from .locales import CHINESE, ENGLISH, get_format_options
from .models import (
    CitationFormatOptions,
    CitationFormatResult,
    CitationInput,
    CitationName,
    CitationSourceType,
    CitationStyle,
    CitationStyleDetection,
    CitationWarningCode,
    ParsedCitationFields,
)
from .names import parse_authors
from .normalization import normalize_doi


def format_citation(entry: CitationInput, options: CitationFormatOptions | None = None) -> CitationFormatResult:
    """Render ``entry`` in its style; ``options`` defaults to the English preset."""
    return CitationFormatter(options or ENGLISH).format(entry)


__all__ = [
    "CitationEngine",
    "CitationFormatter",
    "CitationParser",
    "StyleDetector",
    "CitationFormatOptions",
    "CitationFormatResult",
    "CitationInput",
    "CitationName",
    "CitationSourceType",
    "CitationStyle",
    "CitationStyleDetection",
    "CitationWarningCode",
    "ParsedCitationFields",
    "ENGLISH",
    "CHINESE",
    "format_citation",
    "parse_citation",
    "detect_citation_style",
    "parse_authors",
    "normalize_doi",
    "get_format_options",
]
