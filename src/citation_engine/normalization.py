"""Normalization helpers for citation text, DOIs and URLs."""
from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_TRAILING_PUNCTUATION = re.compile(r"[.。,，;；:：]+$")
_URL_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_BARE_DOMAIN = re.compile(r"^[\w.-]+\.[a-z]{2,}([/?#].*)?$", re.IGNORECASE)
_DOI_PREFIX = re.compile(r"^doi:\s*", re.IGNORECASE)
_DOI_RESOLVER = re.compile(r"^https?://doi\.org/", re.IGNORECASE)

LEADING_INDEX = re.compile(
    r"^\s*(?:"
    r"\[\s*\d+\s*\]"
    r"|【\s*\d+\s*】"
    r"|\(\s*\d{1,3}\s*\)"
    r"|（\s*\d{1,3}\s*）"
    r"|\d{1,3}\s*[.)]"
    r"|\d{1,3}\s*、"
    r"|[①-⑳]"
    r"|[一二三四五六七八九十]+、"
    r")\s*"
)


def compact(value: str | None) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.strip())


def strip_trailing_punctuation(value: str) -> str:
    return _TRAILING_PUNCTUATION.sub("", value).strip()


def normalize_url(value: str | None) -> str:
    """Return an absolute URL where the input looks like one, else the trimmed input."""
    url = (value or "").strip()
    if not url:
        return ""
    if _URL_SCHEME.match(url):
        return url
    if _BARE_DOMAIN.match(url):
        return f"https://{url}"
    return url


def normalize_doi(raw: str | None) -> str:
    """Strip ``doi:`` and resolver prefixes from a DOI. The DOI shape is not validated."""
    value = (raw or "").strip()
    if not value:
        return ""
    value = _DOI_PREFIX.sub("", value)
    value = _DOI_RESOLVER.sub("", value)
    return value.strip()


def doi_url(doi: str) -> str:
    return f"https://doi.org/{doi}" if doi else ""


def normalize_citation_text(raw: str | None) -> str:
    """Straighten quotes and collapse whitespace, keeping any leading index marker."""
    if not raw:
        return ""
    text = raw.replace("\r\n", "\n")
    text = re.sub(r"[“”]", '"', text)
    text = text.replace("’", "'")
    return _WHITESPACE.sub(" ", text).strip()


def strip_leading_index(text: str) -> str:
    """Remove a single enumeration marker such as ``[1]``, ``2.``, ``③`` or ``三、``."""
    return LEADING_INDEX.sub("", text, count=1)


def clean_citation_text(raw: str | None) -> str:
    return strip_leading_index(normalize_citation_text(raw))
