"""Environment-driven settings for the CLI, web app and Streamlit form."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .locales import normalize_locale
from .models import CitationSourceType, CitationStyle

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    locale: str = "en"
    style: CitationStyle = CitationStyle.APA7
    source_type: CitationSourceType = CitationSourceType.WEBSITE
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(dotenv_path: str | None = None) -> Settings:
    """Read ``CITATION_ENGINE_*`` variables, loading a ``.env`` file first if present.

    Invalid values raise ``ValueError`` naming the offending variable.
    """
    load_dotenv(dotenv_path)

    locale = os.getenv("CITATION_ENGINE_LOCALE", "en")
    style = os.getenv("CITATION_ENGINE_STYLE", "apa7")
    source_type = os.getenv("CITATION_ENGINE_SOURCE_TYPE", "website")
    log_level = os.getenv("CITATION_ENGINE_LOG_LEVEL", "WARNING").strip().upper()

    try:
        locale = normalize_locale(locale)
        parsed_style = CitationStyle.from_string(style)
    except ValueError as exc:
        raise ValueError(f"Invalid CITATION_ENGINE_LOCALE/STYLE: {exc}") from exc
    try:
        parsed_source_type = CitationSourceType(source_type.strip().lower())
    except ValueError as exc:
        raise ValueError(f"Invalid CITATION_ENGINE_SOURCE_TYPE: {source_type!r}") from exc
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid CITATION_ENGINE_LOG_LEVEL: {log_level!r}")

    return Settings(
        locale=locale,
        style=parsed_style,
        source_type=parsed_source_type,
        log_level=log_level,
    )
