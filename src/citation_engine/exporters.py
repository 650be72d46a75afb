"""Exporters for structured citation records."""
from __future__ import annotations

import json
import re
from dataclasses import asdict
from typing import Dict, List, Sequence

from .dates import parse_iso_date
from .models import CitationInput, CitationSourceType
from .normalization import compact, normalize_doi, normalize_url


def _record(entry: CitationInput) -> Dict[str, object]:
    data = asdict(entry)
    data["style"] = entry.style.value if hasattr(entry.style, "value") else entry.style
    data["source_type"] = entry.source_type.value if hasattr(entry.source_type, "value") else entry.source_type
    return data


def to_json(entries: Sequence[CitationInput]) -> str:
    return json.dumps([_record(entry) for entry in entries], indent=2, ensure_ascii=False)


def _year(entry: CitationInput) -> str:
    published = parse_iso_date(entry.published_date)
    return str(published.year) if published else ""


def citation_key(entry: CitationInput, fallback: str) -> str:
    """``familyYEAR`` from the first author, e.g. ``lovelace1843``."""
    family = entry.authors[0].family if entry.authors else ""
    key = re.sub(r"[^a-z0-9]", "", f"{family}{_year(entry)}".lower())
    return key or fallback


def to_bibtex(entries: Sequence[CitationInput]) -> str:
    blocks = []
    for idx, entry in enumerate(entries, start=1):
        key = citation_key(entry, f"ref{idx}")
        lines = [f"@{_bibtex_type(entry.source_type)}{{{key},"]
        if entry.authors:
            authors = " and ".join(name.inverted() for name in entry.authors)
            lines.append(f"  author = {{{authors}}},")
        if compact(entry.title):
            lines.append(f"  title = {{{compact(entry.title)}}},")
        if compact(entry.container_title):
            field = "journal" if entry.source_type == CitationSourceType.JOURNAL else "howpublished"
            lines.append(f"  {field} = {{{compact(entry.container_title)}}},")
        if compact(entry.publisher):
            lines.append(f"  publisher = {{{compact(entry.publisher)}}},")
        if _year(entry):
            lines.append(f"  year = {{{_year(entry)}}},")
        if compact(entry.volume):
            lines.append(f"  volume = {{{compact(entry.volume)}}},")
        if compact(entry.issue):
            lines.append(f"  number = {{{compact(entry.issue)}}},")
        if compact(entry.pages):
            lines.append(f"  pages = {{{compact(entry.pages).replace('-', '--')}}},")
        if normalize_doi(entry.doi):
            lines.append(f"  doi = {{{normalize_doi(entry.doi)}}},")
        if normalize_url(entry.url):
            lines.append(f"  url = {{{normalize_url(entry.url)}}},")
        if entry.access_date:
            lines.append(f"  urldate = {{{entry.access_date.strip()}}},")
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def to_ris(entries: Sequence[CitationInput]) -> str:
    blocks = []
    for entry in entries:
        lines = [f"TY  - {_ris_type(entry.source_type)}"]
        for name in entry.authors:
            lines.append(f"AU  - {name.inverted()}")
        if compact(entry.title):
            lines.append(f"TI  - {compact(entry.title)}")
        if compact(entry.container_title):
            lines.append(f"T2  - {compact(entry.container_title)}")
        if compact(entry.publisher):
            lines.append(f"PB  - {compact(entry.publisher)}")
        if _year(entry):
            lines.append(f"PY  - {_year(entry)}")
        if compact(entry.volume):
            lines.append(f"VL  - {compact(entry.volume)}")
        if compact(entry.issue):
            lines.append(f"IS  - {compact(entry.issue)}")
        if compact(entry.pages):
            start, end = _split_pages(compact(entry.pages))
            if start:
                lines.append(f"SP  - {start}")
            if end:
                lines.append(f"EP  - {end}")
        if normalize_doi(entry.doi):
            lines.append(f"DO  - {normalize_doi(entry.doi)}")
        if normalize_url(entry.url):
            lines.append(f"UR  - {normalize_url(entry.url)}")
        if entry.access_date:
            lines.append(f"Y2  - {entry.access_date.strip()}")
        lines.append("ER  - ")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _split_pages(pages: str) -> tuple[str | None, str | None]:
    parts: List[str] = re.split(r"\s*[-–]+\s*", pages, maxsplit=1)
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()
    return pages.strip(), None


def _bibtex_type(source_type: CitationSourceType) -> str:
    return {
        CitationSourceType.JOURNAL: "article",
        CitationSourceType.BOOK: "book",
        CitationSourceType.WEBSITE: "misc",
    }.get(source_type, "misc")


def _ris_type(source_type: CitationSourceType) -> str:
    return {
        CitationSourceType.JOURNAL: "JOUR",
        CitationSourceType.BOOK: "BOOK",
        CitationSourceType.WEBSITE: "ELEC",
    }.get(source_type, "GEN")
