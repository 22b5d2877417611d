import json
from datetime import datetime
from pnr_converter.converter import parse_raw_pnr
from pnr_converter.options import load_options
from pnr_converter.renderer import render_text, to_jsonable, labels

RAW = "1 AA 100 Y 05JAN 1 JFKLAX 1234 1430\n2 AA 200 Y 05JAN 1 LAXSFO 1600 1720"

def _options(**kw):
    opts = {"language": "en", "show_duration": True, "show_transit": True,
            "show_class": True, "show_bags": True, "show_price": True}
    opts.update(kw)
    return opts

def test_render_text_english():
    res = parse_raw_pnr(RAW, base_year=2025)
    res["meta"]["fare"] = {"currency": "USD", "total": "USD 200.00", "total_amount": 200.0}
    out = render_text(res, _options())
    lines = out.splitlines()
    assert lines[0] == "Total: USD 200.00"
    assert lines[1] == "Per flight: USD 100.00"
    assert "#1 05 JAN 12:34 AA AA100 Y-Class" in out
    assert "Leaving: JFK (05 JAN 12:34)" in out
    assert "Arriving: LAX (05 JAN 14:30)" in out
    assert "Transit time: 1h 30m" in out
    assert "Class: Y-Class" in out

def test_render_text_toggles_off():
    res = parse_raw_pnr(RAW, base_year=2025)
    out = render_text(res, _options(language="es", show_class=False, show_transit=False))
    assert "Clase" not in out
    assert "Tiempo de conexión" not in out
    assert "Saliendo: JFK" in out

def test_render_no_segments():
    assert render_text({"meta": {}, "segments": []}, _options()) == "No flight segments detected."

def test_labels_fallback():
    assert labels("fr") == labels("es")

def test_to_jsonable():
    out = to_jsonable({"segments": [{"dep_date": datetime(2025, 1, 5, 12, 34)}], "n": 1})
    assert json.loads(json.dumps(out))["segments"][0]["dep_date"] == "2025-01-05T12:34:00"

def test_load_options_defaults():
    opts = load_options()
    assert opts["language"] == "es"
    assert opts["show_price"] is True

def test_load_options_file(tmp_path):
    p = tmp_path / "opts.yaml"
    p.write_text("language: fr\nshow_price: false\n", encoding="utf-8")
    opts = load_options(str(p))
    assert opts["language"] == "es"
    assert opts["show_price"] is False
    assert opts["show_transit"] is True
