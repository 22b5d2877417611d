import math
from typing import Optional

import regex as re

from .models import Money
from .utils import clean

_MONEY_RE = re.compile(r"\b([A-Z]{3})\s*([0-9][0-9.,]*)\b")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

def _join_decimal(raw: str, sep: str) -> str:
    # only the last occurrence of the decimal separator counts
    head, _, tail = raw.rpartition(sep)
    return head.replace(sep, "") + "." + tail

def parse_locale_number(s: Optional[str]) -> float:
    """
    Decide which of '.'/',' is the decimal separator and return a float.
      1.234,56 -> 1234.56     1,234.56 -> 1234.56
      12,5     -> 12.5        1.234    -> 1234 (thousands)
    Returns math.nan when the string is not a number.
    """
    raw = clean(s).replace(" ", "")
    if not raw:
        return math.nan

    has_comma = "," in raw
    has_dot = "." in raw

    if has_comma and has_dot:
        if raw.rfind(",") > raw.rfind("."):
            norm = _join_decimal(raw.replace(".", ""), ",")
        else:
            norm = raw.replace(",", "")
    elif has_comma:
        if re.search(r",\d{1,2}$", raw):
            norm = _join_decimal(raw, ",")
        else:
            norm = raw.replace(",", "")
    elif has_dot:
        if re.search(r"\.\d{1,2}$", raw):
            norm = _join_decimal(raw, ".")
        else:
            norm = raw.replace(".", "")
    else:
        norm = raw

    if not _NUMBER_RE.match(norm):
        return math.nan
    return float(norm)

def parse_money_raw(s: Optional[str]) -> Optional[Money]:
    """'USD 1.234,56' -> {'currency': 'USD', 'amount': 1234.56}"""
    m = _MONEY_RE.search(clean(s))
    if not m:
        return None
    amount = parse_locale_number(m.group(2))
    if math.isnan(amount):
        return None
    return {"currency": m.group(1).upper(), "amount": amount}

def format_money(n: float) -> str:
    return f"{n:.2f}"

def money_display(money: Money) -> str:
    return f"{money['currency']} {format_money(money['amount'])}"
