"""Completeness checks that produce formatter warnings."""
from __future__ import annotations

import logging
from typing import FrozenSet, Set

from .dates import parse_iso_date
from .models import CitationInput, CitationSourceType, CitationWarningCode
from .normalization import compact, normalize_doi, normalize_url

logger = logging.getLogger(__name__)


def validate_citation_input(entry: CitationInput) -> FrozenSet[CitationWarningCode]:
    """Return the set of warnings triggered by missing or unusable fields.

    The checks depend only on the source type, so every style reports the same
    warnings for the same record.
    """
    warnings: Set[CitationWarningCode] = set()
    if not compact(entry.title):
        warnings.add(CitationWarningCode.MISSING_TITLE)
    if not entry.authors:
        warnings.add(CitationWarningCode.MISSING_AUTHORS)
    if parse_iso_date(entry.published_date) is None:
        warnings.add(CitationWarningCode.MISSING_DATE)
    warnings.update(_validate_source_type_fields(entry))
    if warnings:
        logger.debug("Citation %r missing fields: %s", entry.title, sorted(w.value for w in warnings))
    return frozenset(warnings)


def _validate_source_type_fields(entry: CitationInput) -> Set[CitationWarningCode]:
    warnings: Set[CitationWarningCode] = set()
    has_locator = bool(normalize_doi(entry.doi) or normalize_url(entry.url))

    if entry.source_type == CitationSourceType.JOURNAL:
        if not compact(entry.container_title):
            warnings.add(CitationWarningCode.MISSING_CONTAINER)
        if not has_locator:
            warnings.add(CitationWarningCode.MISSING_URL)
    elif entry.source_type == CitationSourceType.BOOK:
        if not compact(entry.publisher):
            warnings.add(CitationWarningCode.MISSING_PUBLISHER)
    elif entry.source_type == CitationSourceType.WEBSITE:
        if not has_locator:
            warnings.add(CitationWarningCode.MISSING_URL)
    return warnings
