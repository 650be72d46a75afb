"""High-level orchestrator for citation formatting and parsing workflows."""
from __future__ import annotations

import logging
from typing import Iterable, List

from .citation_parser import CitationParser
from .detector import StyleDetector
from .formatter import CitationFormatter
from .locales import get_format_options
from .models import (
    CitationFormatOptions,
    CitationFormatResult,
    CitationInput,
    CitationSourceType,
    CitationStyle,
    CitationStyleDetection,
    ParsedCitationFields,
)

logger = logging.getLogger(__name__)


class CitationEngine:
    """Coordinates detection, field extraction and formatting."""

    def __init__(self, options: CitationFormatOptions | None = None, locale: str = "en"):
        self.options = options or get_format_options(locale)
        self.formatter = CitationFormatter(self.options)
        self.detector = StyleDetector()
        self.parser = CitationParser(self.detector)

    def format(self, entry: CitationInput) -> CitationFormatResult:
        return self.formatter.format(entry)

    def format_many(self, entries: Iterable[CitationInput]) -> List[CitationFormatResult]:
        return [self.format(entry) for entry in entries]

    def detect(self, raw: str) -> CitationStyleDetection:
        return self.detector.detect(raw)

    def parse(self, raw: str, preferred_style: CitationStyle | None = None) -> ParsedCitationFields:
        return self.parser.parse(raw, preferred_style)

    def parse_many(
        self, lines: Iterable[str], preferred_style: CitationStyle | None = None
    ) -> List[ParsedCitationFields]:
        """Parse one citation per non-blank line."""
        return [self.parse(line, preferred_style) for line in lines if line.strip()]

    def convert(
        self,
        raw: str,
        target_style: CitationStyle,
        fallback_source_type: CitationSourceType = CitationSourceType.WEBSITE,
    ) -> CitationFormatResult:
        """Parse a citation and re-render it in ``target_style``.

        Extraction follows the detected style; the guessed source type wins
        over ``fallback_source_type``.
        """
        fields = self.parse(raw)
        entry = fields.to_input(style=target_style, fallback_source_type=fallback_source_type)
        logger.debug("Converting %s citation to %s", fields.style, target_style)
        return self.format(entry)
