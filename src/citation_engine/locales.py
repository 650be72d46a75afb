"""Locale presets for rendered text and user-facing labels."""
from __future__ import annotations

from typing import Dict

from .models import CitationFormatOptions, CitationStyle, CitationWarningCode

ENGLISH = CitationFormatOptions(
    month_names_long=[
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    month_names_short=[
        "Jan.", "Feb.", "Mar.", "Apr.", "May", "Jun.",
        "Jul.", "Aug.", "Sep.", "Oct.", "Nov.", "Dec.",
    ],
    accessed_label="Accessed",
    retrieved_from_label="Retrieved from",
    online_label="Online",
    available_label="Available",
)

CHINESE = CitationFormatOptions(
    month_names_long=[f"{month}月" for month in range(1, 13)],
    month_names_short=[f"{month}月" for month in range(1, 13)],
    accessed_label="访问于",
    retrieved_from_label="检索自",
    online_label="在线",
    available_label="可用",
)

FORMAT_OPTIONS: Dict[str, CitationFormatOptions] = {
    "en": ENGLISH,
    "zh": CHINESE,
}

WARNING_LABELS: Dict[str, Dict[CitationWarningCode, str]] = {
    "en": {
        CitationWarningCode.MISSING_TITLE: "Missing title",
        CitationWarningCode.MISSING_AUTHORS: "Missing authors (an organisation or site name can stand in)",
        CitationWarningCode.MISSING_CONTAINER: "Missing container (journal, website or source name)",
        CitationWarningCode.MISSING_PUBLISHER: "Missing publisher",
        CitationWarningCode.MISSING_URL: "Missing URL or DOI",
        CitationWarningCode.MISSING_DATE: "Missing date or year",
    },
    "zh": {
        CitationWarningCode.MISSING_TITLE: "缺少题名",
        CitationWarningCode.MISSING_AUTHORS: "缺少作者（可留空，用机构/网站名替代）",
        CitationWarningCode.MISSING_CONTAINER: "缺少来源/期刊/网站名（部分格式可省略）",
        CitationWarningCode.MISSING_PUBLISHER: "缺少出版者（图书/部分网页可填写）",
        CitationWarningCode.MISSING_URL: "缺少 URL/DOI（网页通常需要 URL）",
        CitationWarningCode.MISSING_DATE: "缺少日期/年份",
    },
}

STYLE_LABELS: Dict[CitationStyle, str] = {
    CitationStyle.APA7: "APA 7",
    CitationStyle.MLA9: "MLA 9",
    CitationStyle.CHICAGO: "Chicago",
    CitationStyle.IEEE: "IEEE",
    CitationStyle.GBT7714: "GB/T 7714",
}


def normalize_locale(locale: str) -> str:
    """Map ``en-US``/``zh_CN`` style tags onto a preset key."""
    key = (locale or "").strip().lower().replace("_", "-").split("-")[0]
    if key not in FORMAT_OPTIONS:
        raise ValueError(f"Unsupported locale: {locale!r}")
    return key


def get_format_options(locale: str = "en") -> CitationFormatOptions:
    return FORMAT_OPTIONS[normalize_locale(locale)]


def warning_label(code: CitationWarningCode, locale: str = "en") -> str:
    return WARNING_LABELS[normalize_locale(locale)][code]


def style_label(style: object) -> str:
    if isinstance(style, CitationStyle):
        return STYLE_LABELS[style]
    return str(style)
