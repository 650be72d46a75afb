"""Author name parsing and per-style author list rendering."""
from __future__ import annotations

import re
from typing import List, Sequence

from .models import CitationName
from .normalization import compact, strip_trailing_punctuation

APA_MAX_LISTED_AUTHORS = 20
APA_TRUNCATED_HEAD = 19
GBT_MAX_LISTED_AUTHORS = 3

_CHUNK_SEPARATORS = re.compile(r"[;；]")


def initials(given: str) -> str:
    """Return ``"J. R."`` for ``"John Ronald"``; hyphenated parts count as separate names."""
    parts = [part.strip() for part in re.split(r"[\s-]+", given or "")]
    return " ".join(f"{part[0].upper()}." for part in parts if part)


def parse_authors(raw: str | None) -> List[CitationName]:
    """Split freeform author text into names.

    One author per line or per ``;``. ``Family, Given`` is honoured when a comma
    is present; otherwise the last word is taken as the family name.
    """
    text = (raw or "").strip()
    if not text:
        return []

    chunks = [
        chunk.strip()
        for line in text.splitlines()
        for chunk in _CHUNK_SEPARATORS.split(line)
        if chunk.strip()
    ]
    names: List[CitationName] = []
    for chunk in chunks:
        if "," in chunk:
            family, *rest = [compact(part) for part in chunk.split(",")]
            name = CitationName(given=compact(" ".join(rest)), family=family)
        else:
            tokens = chunk.split()
            if len(tokens) <= 1:
                name = CitationName(given="", family=tokens[0] if tokens else chunk)
            else:
                name = CitationName(given=" ".join(tokens[:-1]), family=tokens[-1])
        if name.family or name.given:
            names.append(name)
    return names


def join_with_and(items: Sequence[str]) -> str:
    if len(items) <= 1:
        return items[0] if items else ""
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def join_with_ampersand(items: Sequence[str]) -> str:
    if len(items) <= 1:
        return items[0] if items else ""
    if len(items) == 2:
        return f"{items[0]} & {items[1]}"
    return f"{', '.join(items[:-1])}, & {items[-1]}"


def _inverted_full(name: CitationName) -> str:
    return CitationName(given=compact(name.given), family=strip_trailing_punctuation(name.family)).inverted()


def _natural_full(name: CitationName) -> str:
    return f"{compact(name.given)} {strip_trailing_punctuation(name.family)}".strip()


def authors_apa(names: Sequence[CitationName]) -> str:
    """``Family, I.`` entries joined with ``&``; more than 20 authors keep 19 plus the last."""
    if not names:
        return ""
    formatted = [
        CitationName(given=initials(n.given), family=strip_trailing_punctuation(n.family)).inverted()
        for n in names
    ]
    if len(formatted) <= APA_MAX_LISTED_AUTHORS:
        return join_with_ampersand(formatted)
    head = ", ".join(formatted[:APA_TRUNCATED_HEAD])
    return f"{head}, …, {formatted[-1]}"


def authors_mla(names: Sequence[CitationName]) -> str:
    if not names:
        return ""
    first = _inverted_full(names[0])
    if len(names) == 1:
        return first
    if len(names) == 2:
        return f"{first}, and {_natural_full(names[1])}"
    return f"{first}, et al."


def authors_chicago(names: Sequence[CitationName]) -> str:
    if not names:
        return ""
    formatted = [_inverted_full(names[0])] + [_natural_full(n) for n in names[1:]]
    return join_with_and(formatted)


def authors_ieee(names: Sequence[CitationName]) -> str:
    if not names:
        return ""
    formatted = [f"{initials(n.given)} {strip_trailing_punctuation(n.family)}".strip() for n in names]
    if len(formatted) == 1:
        return formatted[0]
    return f"{', '.join(formatted[:-1])}, and {formatted[-1]}"


def authors_gbt(names: Sequence[CitationName]) -> str:
    """``Family INITIALS`` comma-joined; more than three authors end with ``et al.``."""
    if not names:
        return ""
    formatted = []
    for n in names:
        letters = "".join(part[0].upper() for part in compact(n.given).split())
        formatted.append(f"{strip_trailing_punctuation(n.family)} {letters}".strip())
    if len(formatted) <= GBT_MAX_LISTED_AUTHORS:
        return ", ".join(formatted)
    return f"{', '.join(formatted[:GBT_MAX_LISTED_AUTHORS])}, et al."
