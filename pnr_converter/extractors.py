import logging
import math
from typing import Dict, List, Optional

import regex as re
from bs4 import BeautifulSoup, Tag

from .models import FareSummary, Money, Segment
from .money import money_display, parse_locale_number, parse_money_raw
from .utils import after_label, clean, last_token, norm_label

logger = logging.getLogger(__name__)

# =========================
# Constants & small helpers
# =========================

FARE_LABELS = {"fare": "base", "tarifa": "base", "taxes": "taxes", "impuestos": "taxes", "total": "total"}

# Inline "Label: USD 123.45" fallback, one pattern per fare field
_INLINE_FARE_RES = {
    "base": re.compile(r"(?i)\b(?:fare|tarifa)\b\s*[:\-]?\s*([A-Z]{3})\s*([0-9][0-9.,]*)"),
    "taxes": re.compile(r"(?i)\b(?:taxes|impuestos)\b\s*[:\-]?\s*([A-Z]{3})\s*([0-9][0-9.,]*)"),
    "total": re.compile(r"(?i)\btotal\b\s*[:\-]?\s*([A-Z]{3})\s*([0-9][0-9.,]*)"),
}

# Header label in the second cell of an AIR flight row (text already accent-stripped)
FLIGHT_NUMBER_LABEL_RE = re.compile(r"(?i)flight\s*number|numero\s*de\s*vuelo")

FLIGHT_ROW_CELLS = 8

def _cell_text(node: Tag) -> str:
    return clean(node.get_text(" "))

def _leaf_cells(soup: BeautifulSoup) -> List[Tag]:
    return [td for td in soup.find_all("td") if td.find("td") is None]

def _direct_cells(tr: Tag) -> List[Tag]:
    return tr.find_all("td", recursive=False)

# ====================
# Fare (HTML document)
# ====================

def _paired_fare(cells: List[Tag]) -> Dict[str, Money]:
    found: Dict[str, Money] = {}
    for i in range(len(cells) - 1):
        field = FARE_LABELS.get(norm_label(_cell_text(cells[i])))
        if not field:
            continue
        money = parse_money_raw(_cell_text(cells[i + 1]))
        if money:
            found[field] = money
    return found

def _inline_fare(cells: List[Tag], field: str) -> Optional[Money]:
    pat = _INLINE_FARE_RES[field]
    for td in cells:
        txt = _cell_text(td)
        if not txt:
            continue
        m = pat.search(txt)
        if not m:
            continue
        amount = parse_locale_number(m.group(2))
        if not math.isnan(amount):
            return {"currency": m.group(1).upper(), "amount": amount}
    return None

def extract_fare_from_html(soup: BeautifulSoup) -> Optional[FareSummary]:
    cells = _leaf_cells(soup)
    if not cells:
        return None

    found = _paired_fare(cells)
    for field in ("base", "taxes", "total"):
        if field not in found:
            money = _inline_fare(cells, field)
            if money:
                logger.debug("fare %s taken from inline text", field)
                found[field] = money

    if not found:
        return None

    base, taxes, total = found.get("base"), found.get("taxes"), found.get("total")
    out: FareSummary = {
        "currency": (total or taxes or base)["currency"],
        "base": money_display(base) if base else None,
        "taxes": money_display(taxes) if taxes else None,
        "total": money_display(total) if total else None,
        "base_amount": base["amount"] if base else None,
        "taxes_amount": taxes["amount"] if taxes else None,
        "total_amount": total["amount"] if total else None,
    }
    return out

# ===========================
# Flight segments (AIR table)
# ===========================

def is_flight_row(cells: List[Tag]) -> bool:
    """8 direct cells and a 'Flight Number' / 'Número de vuelo' label in the second one."""
    if len(cells) != FLIGHT_ROW_CELLS:
        return False
    return bool(FLIGHT_NUMBER_LABEL_RE.search(norm_label(_cell_text(cells[1]))))

def parse_nested_details(td: Tag) -> Dict[str, str]:
    """Label/value rows of the detail sub-table inside the last cell of a flight row."""
    details: Dict[str, str] = {}
    for row in td.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < 2:
            continue
        k = norm_label(_cell_text(cells[0]))
        v = _cell_text(cells[1])
        if not k or not v:
            continue
        if "flying time" in k or "duracion del vuelo" in k:
            details["duration"] = v
        if "stops" in k or "escalas" in k:
            details["stops"] = v
        if k == "type" or "tipo" in k:
            details["equip"] = v
        if "operated by" in k or "operado por" in k:
            details["operated_by"] = v
        if "seat" in k or "asiento" in k:
            details["seat"] = v
        if "bags" in k or "equipaje" in k:
            details["bags"] = v
    return details

def parse_html_segments(soup: BeautifulSoup) -> List[Segment]:
    segments: List[Segment] = []
    for tr in soup.find_all("tr"):
        cells = _direct_cells(tr)
        if not is_flight_row(cells):
            continue
        airline = _cell_text(cells[0])
        if not airline:
            logger.debug("flight row without airline skipped")
            continue
        texts = [_cell_text(td) for td in cells[:7]]

        seg: Segment = {
            "idx": len(segments) + 1,
            "airline": airline,
            "flight_number": last_token(texts[1]),
            "cabin": after_label(texts[2]),
            "from": after_label(texts[3]),
            "dep_text": after_label(texts[4]),
            "to": after_label(texts[5]),
            "arr_text": after_label(texts[6]),
        }
        seg.update(parse_nested_details(cells[7]))
        segments.append(seg)
    return segments

# ============================
# Flight segments (RAW lines)
# ============================

# Grammar rules of a terminal segment line, e.g.
#   1 AA 100 Y 05JAN 1 JFKLAX 1234 1430
#   2 IB6845 J 12DIC 4 MADEZE HK1 2355 0920
SEGMENT_NUMBER = r"\d+"
CARRIER = r"(?P<carrier>[A-Z0-9]{2,3}?)"
FLIGHT_TAIL = r"(?P<tail>[0-9]{1,4}[A-Z0-9]?)"
CABIN = r"(?P<cabin>[A-Z])"
DEP_DAY_MONTH = r"(?P<day>\d{1,2})(?P<mon>[A-Z]{3})"
CITY_PAIR = r"(?P<from>[A-Z]{3})(?P<to>[A-Z]{3})"
TIME_PAIR = r"(?P<dep>\d{3,4})\s+(?P<arr>\d{3,4})(?!\d)"

RAW_SEGMENT_RE = re.compile(
    rf"(?i)^{SEGMENT_NUMBER}\s+{CARRIER}\s*{FLIGHT_TAIL}\s+{CABIN}\s+{DEP_DAY_MONTH}\s+"
    rf"(?:\d+\*?\s+)?{CITY_PAIR}\s+(?:.*?\s)??{TIME_PAIR}"
)

def _hhmm(token: str) -> str:
    t = token.zfill(4)
    return f"{t[:2]}:{t[2:]}"

def parse_raw_segments(text: str) -> List[Segment]:
    lines = [clean(ln) for ln in re.split(r"\r\n|\r|\n", text or "")]
    segments: List[Segment] = []
    for line in lines:
        if not line:
            continue
        m = RAW_SEGMENT_RE.match(line)
        if not m:
            logger.debug("not a segment line: %r", line)
            continue
        carrier = m.group("carrier").upper()
        day, mon = m.group("day"), m.group("mon").upper()
        segments.append({
            "idx": len(segments) + 1,
            "airline": carrier,
            "flight_number": carrier + m.group("tail").upper(),
            "cabin": f"{m.group('cabin').upper()}-Class",
            "from": m.group("from").upper(),
            "to": m.group("to").upper(),
            "dep_text": f"{day} {mon} {_hhmm(m.group('dep'))}",
            "arr_text": f"{day} {mon} {_hhmm(m.group('arr'))}",
        })
    return segments

# =====================
# Passengers / baggage
# =====================

def detect_passengers(text: str) -> Optional[int]:
    t = clean(text)
    m = re.search(r"(?i)\b(?:passengers|pasajeros)\b\D{0,10}(\d{1,3})\b", t)
    if m:
        return int(m.group(1))
    m = re.search(r"(?i)\b(\d{1,3})\b\s*(?:passengers|pasajeros)\b", t)
    if m:
        return int(m.group(1))
    return None

def detect_bags(text: str) -> Optional[str]:
    t = clean(text)
    m = re.search(r"(?i)\b(?:bags|equipaje)\b\s*[:\-]?\s*([A-Za-z0-9 ]{1,20})", t)
    if m:
        return clean(m.group(1))
    m = re.search(r"(?i)\b(\d{1,2}\s*(?:PC|PCS|PIECE|PIECES|BAGS?))\b", t)
    if m:
        return clean(m.group(1))
    m = re.search(r"(?i)\b(\d{1,2}\s*KG)\b", t)
    if m:
        return clean(m.group(1))
    return None
