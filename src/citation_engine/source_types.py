"""Source type classification heuristics for freeform citations."""
from __future__ import annotations

import re
from typing import Optional

from .models import CitationSourceType

GBT_TYPE_MARKER = re.compile(r"\[(?:J|M|EB/OL)\]", re.IGNORECASE)

_WEBSITE_MARKER = re.compile(r"\[EB/OL\]", re.IGNORECASE)
_JOURNAL_MARKERS = (
    re.compile(r"\[J\]", re.IGNORECASE),
    re.compile(r"\bvol\.\s*\d+", re.IGNORECASE),
    re.compile(r"\bpp\.\s*[\d–-]+", re.IGNORECASE),
)
_BOOK_MARKER = re.compile(r"\[M\]", re.IGNORECASE)


def classify_source_type(text: str) -> Optional[CitationSourceType]:
    """Guess the source type from explicit markers; ``None`` when there is no evidence."""
    if _looks_like_website(text):
        return CitationSourceType.WEBSITE
    if _looks_like_journal(text):
        return CitationSourceType.JOURNAL
    if _looks_like_book(text):
        return CitationSourceType.BOOK
    return None


def has_gbt_marker(text: str) -> bool:
    return GBT_TYPE_MARKER.search(text) is not None


def _looks_like_website(text: str) -> bool:
    return _WEBSITE_MARKER.search(text) is not None


def _looks_like_journal(text: str) -> bool:
    return any(marker.search(text) for marker in _JOURNAL_MARKERS)


def _looks_like_book(text: str) -> bool:
    return _BOOK_MARKER.search(text) is not None
