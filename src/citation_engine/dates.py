"""Parsing and rendering of ISO-like publication dates."""
from __future__ import annotations

import re
from typing import Optional, Sequence

from .models import DateParts

_YEAR = re.compile(r"([0-9]{4})")
_YEAR_MONTH = re.compile(r"([0-9]{4})-([0-9]{2})")
_YEAR_MONTH_DAY = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

_TOKEN_YMD = re.compile(r"([0-9]{4})[/-]([0-9]{1,2})[/-]([0-9]{1,2})")
_TOKEN_YM = re.compile(r"([0-9]{4})[/-]([0-9]{1,2})")


def parse_iso_date(value: str | None) -> Optional[DateParts]:
    """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

    Any other shape, or a month/day out of range, yields ``None``. Calendar
    validity is not checked, so ``2020-02-30`` is accepted.
    """
    text = (value or "").strip()
    if not text:
        return None

    match = _YEAR.fullmatch(text)
    if match:
        return DateParts(year=int(match.group(1)))

    match = _YEAR_MONTH.fullmatch(text)
    if match:
        month = int(match.group(2))
        if not 1 <= month <= 12:
            return None
        return DateParts(year=int(match.group(1)), month=month)

    match = _YEAR_MONTH_DAY.fullmatch(text)
    if not match:
        return None
    month = int(match.group(2))
    day = int(match.group(3))
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return DateParts(year=int(match.group(1)), month=month, day=day)


def month_name(month: int, names: Sequence[str]) -> str:
    if 1 <= month <= len(names):
        return names[month - 1]
    return str(month)


def format_day_month_year(date: DateParts, month_names: Sequence[str]) -> str:
    """Render ``5 March 2020`` (MLA)."""
    if not date.month:
        return str(date.year)
    name = month_name(date.month, month_names)
    if not date.day:
        return f"{name} {date.year}"
    return f"{date.day} {name} {date.year}"


def format_month_day_year(date: DateParts, month_names: Sequence[str]) -> str:
    """Render ``March 5, 2020`` (Chicago, IEEE)."""
    if not date.month:
        return str(date.year)
    name = month_name(date.month, month_names)
    if not date.day:
        return f"{name} {date.year}"
    return f"{name} {date.day}, {date.year}"


def format_year_month_day(date: DateParts) -> str:
    """Render ``2020-03-05`` (GB/T 7714)."""
    if not date.month:
        return str(date.year)
    if not date.day:
        return f"{date.year}-{date.month:02d}"
    return f"{date.year}-{date.month:02d}-{date.day:02d}"


def normalize_date_token(token: str) -> str:
    """Turn ``2024/1/5``-style tokens into zero-padded ISO text, or ``""``."""
    text = token.strip()
    match = _TOKEN_YMD.fullmatch(text)
    if match:
        return f"{match.group(1)}-{int(match.group(2)):02d}-{int(match.group(3)):02d}"
    match = _TOKEN_YM.fullmatch(text)
    if match:
        return f"{match.group(1)}-{int(match.group(2)):02d}"
    match = _YEAR.fullmatch(text)
    if match:
        return match.group(1)
    return ""
