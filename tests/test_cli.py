import json
import os
from click.testing import CliRunner
from pnr_converter.cli import main
from pnr_converter.loader import load_pnr_text

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")

def test_convert_json():
    runner = CliRunner()
    result = runner.invoke(main, ["convert", os.path.join(FIXTURES, "raw.txt"), "--base-year", "2025"])
    assert result.exit_code == 0
    res = json.loads(result.output.strip().splitlines()[0])
    assert res["format"] == "raw"
    assert res["errors"] is None
    segs = res["result"]["segments"]
    assert segs[0]["flight_number"] == "IB6845"
    assert segs[0]["dep_date"] == "2025-12-30T23:55:00"

def test_convert_text_english():
    runner = CliRunner()
    result = runner.invoke(main, ["convert", os.path.join(FIXTURES, "air.html"), "--format", "text", "--lang", "en", "--base-year", "2025"])
    assert result.exit_code == 0
    assert "Leaving: EZE (30 Dic 23:50)" in result.output
    assert "Transit time: 50h 45m" in result.output

def test_convert_directory(tmp_path):
    (tmp_path / "a.txt").write_text("1 AA 100 Y 05JAN 1 JFKLAX 1234 1430\n", encoding="utf-8")
    (tmp_path / "b.txt").write_text("nothing to see\n", encoding="utf-8")
    (tmp_path / "c.pdf").write_text("ignored", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["convert", str(tmp_path)])
    assert result.exit_code == 0
    rows = [json.loads(ln) for ln in result.output.strip().splitlines()]
    assert [os.path.basename(r["path_in"]) for r in rows] == ["a.txt", "b.txt"]
    assert rows[1]["errors"] == "no_segments"

def test_convert_stdin_with_reference_date():
    runner = CliRunner()
    result = runner.invoke(main, ["convert", "-", "--reference-date", "issued 12 March 2024"],
                           input="1 AA 100 Y 05JAN 1 JFKLAX 1234 1430\n")
    assert result.exit_code == 0
    res = json.loads(result.output.strip())
    assert res["result"]["segments"][0]["dep_date"].startswith("2024-01-05")

def test_bad_reference_date():
    runner = CliRunner()
    result = runner.invoke(main, ["convert", "-", "--reference-date", "zzz"], input="x\n")
    assert result.exit_code != 0

def test_convert_file_with_bom(tmp_path):
    p = tmp_path / "bom.txt"
    p.write_text("1 AA 100 Y 05JAN 1 JFKLAX 1234 1430\n", encoding="utf-8-sig")
    runner = CliRunner()
    result = runner.invoke(main, ["convert", str(p), "--base-year", "2025"])
    assert result.exit_code == 0
    res = json.loads(result.output.strip())
    assert res["errors"] is None
    assert res["result"]["segments"][0]["flight_number"] == "AA100"

def test_load_pnr_text_encodings(tmp_path):
    p = tmp_path / "bom.txt"
    p.write_bytes(b"\xef\xbb\xbf1 AA 100")
    assert load_pnr_text(str(p)) == ("1 AA 100", None)
    p.write_bytes("Número".encode("cp1252"))
    assert load_pnr_text(str(p)) == ("Número", None)
    text, err = load_pnr_text(str(tmp_path / "missing.txt"))
    assert text == "" and err.startswith("read_error")
