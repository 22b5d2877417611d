import logging
from datetime import datetime
from typing import Dict, Optional, Tuple

import regex as re

from .utils import clean, norm_token

logger = logging.getLogger(__name__)

# 0-based month indexes
MONTHS_EN_3: Dict[str, int] = {
    "JAN": 0, "FEB": 1, "MAR": 2, "APR": 3, "MAY": 4, "JUN": 5,
    "JUL": 6, "AUG": 7, "SEP": 8, "OCT": 9, "NOV": 10, "DEC": 11,
}

MONTHS_ES_3: Dict[str, int] = {
    "ENE": 0, "FEB": 1, "MAR": 2, "ABR": 3, "MAY": 4, "JUN": 5,
    "JUL": 6, "AGO": 7, "SEP": 8, "OCT": 9, "NOV": 10, "DIC": 11,
}

MONTHS_ES_FULL: Dict[str, int] = {
    "ENERO": 0, "FEBRERO": 1, "MARZO": 2, "ABRIL": 3, "MAYO": 4, "JUNIO": 5,
    "JULIO": 6, "AGOSTO": 7, "SEPTIEMBRE": 8, "OCTUBRE": 9, "NOVIEMBRE": 10, "DICIEMBRE": 11,
}

# One key per token; colliding EN/ES abbreviations appear once
MONTHS: Dict[str, int] = {**MONTHS_EN_3, **MONTHS_ES_3, **MONTHS_ES_FULL}

# "05 ENE 12:34", "5 Septiembre 9:05", "12 mar. 23:50" (day, month word, H:MM)
_DATE_TEXT_RE = re.compile(r"(?:^|\s)(\d{1,2})\s+(\p{L}{3,})\.?\s+(\d{1,2}):(\d{2})")

def month_from_token(token: Optional[str]) -> Optional[int]:
    k = norm_token(token)
    if not k:
        return None
    if k in MONTHS_ES_FULL:
        return MONTHS_ES_FULL[k]
    k3 = k[:3]
    if k3 in MONTHS_ES_3:
        return MONTHS_ES_3[k3]
    if k3 in MONTHS_EN_3:
        return MONTHS_EN_3[k3]
    return None

def match_date_text(text: Optional[str]) -> Optional[Tuple[int, int, int, int]]:
    """(day, 0-based month, hour, minute) of a '<day> <month> <H:MM>' text, no year applied."""
    m = _DATE_TEXT_RE.search(clean(text))
    if not m:
        return None
    mon = month_from_token(m.group(2))
    if mon is None:
        logger.debug("unknown month token %r in %r", m.group(2), text)
        return None
    return int(m.group(1)), mon, int(m.group(3)), int(m.group(4))

def date_from_parts(parts: Optional[Tuple[int, int, int, int]], year: int) -> Optional[datetime]:
    if parts is None:
        return None
    day, mon, hour, minute = parts
    try:
        return datetime(year, mon + 1, day, hour, minute)
    except ValueError:
        logger.debug("invalid calendar date %s for year %s", parts, year)
        return None

def parse_date_text_loose(text: Optional[str], base_year: int) -> Optional[datetime]:
    """Resolve '<day> <month> <H:MM>' inside base_year. None if anything is off."""
    return date_from_parts(match_date_text(text), base_year)
