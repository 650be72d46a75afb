import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest

from citation_engine.locales import ENGLISH
from citation_engine.models import CitationInput, CitationName, CitationSourceType, CitationStyle

SETTINGS_ENV = {
    "CITATION_ENGINE_LOCALE": "en",
    "CITATION_ENGINE_STYLE": "apa7",
    "CITATION_ENGINE_SOURCE_TYPE": "website",
    "CITATION_ENGINE_LOG_LEVEL": "WARNING",
}


@pytest.fixture(autouse=True)
def default_settings_env(monkeypatch):
    """Pin the settings variables so a developer's shell or .env cannot leak in."""

    for name, value in SETTINGS_ENV.items():
        monkeypatch.setenv(name, value)


@pytest.fixture()
def english_options():
    return ENGLISH


@pytest.fixture()
def make_entry():
    """Build a fully populated record; keyword overrides replace single fields."""

    def _make(style=CitationStyle.APA7, source_type=CitationSourceType.JOURNAL, **overrides) -> CitationInput:
        fields = dict(
            style=style,
            source_type=source_type,
            authors=[CitationName(given="Ada", family="Lovelace"), CitationName(given="Charles", family="Babbage")],
            title="On the Analytical Engine",
            container_title="Annals of Computing",
            publisher="Academic Press",
            published_date="2020-03-05",
            access_date="2024-01-15",
            volume="12",
            issue="3",
            pages="45-67",
            url="https://example.org/engine",
            doi="10.1234/engine.2020",
        )
        fields.update(overrides)
        return CitationInput(**fields)

    return _make
