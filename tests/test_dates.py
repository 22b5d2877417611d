from datetime import datetime
from pnr_converter.dates import month_from_token, match_date_text, date_from_parts, parse_date_text_loose, MONTHS

def test_month_tokens_bilingual():
    assert month_from_token("ENE") == month_from_token("JAN") == 0
    assert month_from_token("Septiembre") == 8
    assert month_from_token("dic") == 11
    assert month_from_token("Ago.") == 7
    assert month_from_token("sept") == 8
    assert month_from_token("Diciembre") == 11

def test_unknown_month_is_unresolved():
    assert month_from_token("XYZ") is None
    assert month_from_token("") is None
    assert month_from_token(None) is None

def test_colliding_abbreviations_share_one_entry():
    # 12 English + 4 Spanish-only abbreviations + 12 Spanish names
    assert len(MONTHS) == 28
    assert MONTHS["MAR"] == 2
    assert MONTHS["ABR"] == MONTHS["APR"] == 3

def test_parse_date_text_loose():
    assert parse_date_text_loose("05 Ene 12:34", 2025) == datetime(2025, 1, 5, 12, 34)
    assert parse_date_text_loose("Salida 5 septiembre 9:05", 2024) == datetime(2024, 9, 5, 9, 5)
    assert parse_date_text_loose("12 DIC 23:55", 2025) == datetime(2025, 12, 12, 23, 55)

def test_parse_date_text_loose_failures():
    assert parse_date_text_loose("05 XYZ 10:00", 2025) is None
    assert parse_date_text_loose("31 FEB 10:00", 2025) is None
    assert parse_date_text_loose("no date", 2025) is None
    assert parse_date_text_loose("", 2025) is None

def test_match_date_text_keeps_year_out():
    parts = match_date_text("29 FEB 10:00")
    assert parts == (29, 1, 10, 0)
    assert date_from_parts(parts, 2028) == datetime(2028, 2, 29, 10, 0)
    assert date_from_parts(parts, 2027) is None
    assert date_from_parts(None, 2027) is None
