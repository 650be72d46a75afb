import logging
from pathlib import Path

import pytest

from citation_engine.config import load_settings
from citation_engine.locales import CHINESE, ENGLISH, get_format_options, style_label, warning_label
from citation_engine.models import CitationSourceType, CitationStyle, CitationWarningCode


def test_defaults(tmp_path: Path):
    settings = load_settings(tmp_path / "missing.env")

    assert settings.locale == "en"
    assert settings.style == CitationStyle.APA7
    assert settings.source_type == CitationSourceType.WEBSITE
    assert settings.log_level_number == logging.WARNING


def test_values_from_dotenv_file(tmp_path: Path, monkeypatch):
    for name in ("CITATION_ENGINE_LOCALE", "CITATION_ENGINE_STYLE", "CITATION_ENGINE_LOG_LEVEL"):
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("CITATION_ENGINE_LOCALE=zh_CN\nCITATION_ENGINE_STYLE=GB/T 7714\nCITATION_ENGINE_LOG_LEVEL=debug\n")

    settings = load_settings(env_file)

    assert settings.locale == "zh"
    assert settings.style == CitationStyle.GBT7714
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [
        ("CITATION_ENGINE_STYLE", "harvard"),
        ("CITATION_ENGINE_SOURCE_TYPE", "podcast"),
        ("CITATION_ENGINE_LOG_LEVEL", "chatty"),
        ("CITATION_ENGINE_LOCALE", "fr"),
    ],
)
def test_invalid_values_raise(monkeypatch, tmp_path: Path, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match="CITATION_ENGINE_"):
        load_settings(tmp_path / "missing.env")


def test_style_aliases():
    assert CitationStyle.from_string("APA 7") == CitationStyle.APA7
    assert CitationStyle.from_string("mla-9") == CitationStyle.MLA9
    assert CitationStyle.from_string("GB/T 7714") == CitationStyle.GBT7714
    with pytest.raises(ValueError):
        CitationStyle.from_string("vancouver")


def test_locale_presets():
    assert get_format_options("en-US") is ENGLISH
    assert get_format_options("zh") is CHINESE
    assert CHINESE.month_names_long[0] == "1月"
    with pytest.raises(ValueError):
        get_format_options("de")


def test_labels():
    assert warning_label(CitationWarningCode.MISSING_TITLE, "zh") == "缺少题名"
    assert warning_label(CitationWarningCode.MISSING_URL) == "Missing URL or DOI"
    assert style_label(CitationStyle.GBT7714) == "GB/T 7714"
    assert style_label("unknown") == "unknown"
