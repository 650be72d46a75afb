from citation_engine.dates import (
    format_day_month_year,
    format_month_day_year,
    format_year_month_day,
    month_name,
    normalize_date_token,
    parse_iso_date,
)
from citation_engine.locales import ENGLISH
from citation_engine.models import DateParts


def test_parse_iso_date_shapes():
    assert parse_iso_date("2020") == DateParts(year=2020)
    assert parse_iso_date("2020-03") == DateParts(year=2020, month=3)
    assert parse_iso_date(" 2020-03-05 ") == DateParts(year=2020, month=3, day=5)


def test_parse_iso_date_rejects_bad_values():
    assert parse_iso_date("") is None
    assert parse_iso_date(None) is None
    assert parse_iso_date("2020-13") is None
    assert parse_iso_date("2020-01-32") is None
    assert parse_iso_date("March 2020") is None
    assert parse_iso_date("2020-3-5") is None


def test_parse_iso_date_does_not_check_calendar():
    assert parse_iso_date("2020-02-30") == DateParts(year=2020, month=2, day=30)


def test_renderers():
    date = DateParts(year=2020, month=3, day=5)
    assert format_day_month_year(date, ENGLISH.month_names_short) == "5 Mar. 2020"
    assert format_month_day_year(date, ENGLISH.month_names_long) == "March 5, 2020"
    assert format_year_month_day(date) == "2020-03-05"
    assert format_month_day_year(DateParts(year=2020, month=3), ENGLISH.month_names_long) == "March 2020"
    assert format_year_month_day(DateParts(year=2020)) == "2020"


def test_month_name_falls_back_to_number():
    assert month_name(4, ["Jan"]) == "4"


def test_normalize_date_token():
    assert normalize_date_token("2024/1/5") == "2024-01-05"
    assert normalize_date_token("2024-7") == "2024-07"
    assert normalize_date_token("2024") == "2024"
    assert normalize_date_token("yesterday") == ""
