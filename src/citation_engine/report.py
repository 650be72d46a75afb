"""Plain-text reports for formatted and parsed citations."""
from __future__ import annotations

from typing import List, Sequence

from .locales import style_label, warning_label
from .models import CitationFormatResult, CitationStyleDetection, ParsedCitationFields

_FIELD_LABELS = (
    ("authors_raw", "Authors"),
    ("title", "Title"),
    ("container_title", "Container"),
    ("publisher", "Publisher"),
    ("published_date", "Published"),
    ("access_date", "Accessed"),
    ("volume", "Volume"),
    ("issue", "Issue"),
    ("pages", "Pages"),
    ("doi", "DOI"),
    ("url", "URL"),
)


def render_format_report(results: Sequence[CitationFormatResult], locale: str = "en") -> str:
    """Return each citation followed by its warnings."""

    lines: List[str] = []
    for idx, result in enumerate(results, start=1):
        prefix = f"[{idx}] " if len(results) > 1 else ""
        lines.append(f"{prefix}{result.citation}")
        for code in result.sorted_warnings():
            lines.append(f"  [WARNING] {code.value}: {warning_label(code, locale)}")
    if not lines:
        lines.append("No citations to format.")
    return "\n".join(lines)


def render_detection(detection: CitationStyleDetection) -> str:
    return f"{style_label(detection.style)} (confidence {detection.confidence:.2f})"


def render_parse_report(fields: ParsedCitationFields) -> str:
    """Return the detected style and every non-empty extracted field."""

    lines = [f"Style: {style_label(fields.style)} (confidence {fields.confidence:.2f})"]
    if fields.source_type:
        lines.append(f"Source type: {fields.source_type.value}")
    for attr, label in _FIELD_LABELS:
        value = getattr(fields, attr)
        if value:
            lines.append(f"{label}: {value.replace(chr(10), '; ')}")
    return "\n".join(lines)
