import re
import unicodedata
from datetime import datetime
from typing import Optional

from dateutil import parser as dateparser

_WS_RE = re.compile(r"\s+")

def clean(s: Optional[str]) -> str:
    """NBSP to space, collapse whitespace, trim."""
    if not s:
        return ""
    s = s.replace("\u00a0", " ")
    return _WS_RE.sub(" ", s).strip()

def strip_accents(s: str) -> str:
    s = unicodedata.normalize("NFKD", s)
    return "".join([c for c in s if not unicodedata.combining(c)])

def norm_token(s: Optional[str]) -> str:
    """Uppercase, strip accents. 'Septiembre' -> 'SEPTIEMBRE', 'Dic.' stays 'DIC.'"""
    if not s:
        return ""
    return strip_accents(s.strip().upper())

def norm_label(s: Optional[str]) -> str:
    """Lowercase, strip accents and one trailing colon: 'Duración del vuelo:' -> 'duracion del vuelo'."""
    s = clean(s)
    if s.endswith(":"):
        s = s[:-1]
    return strip_accents(s.lower())

def last_token(s: Optional[str]) -> str:
    parts = clean(s).split(" ")
    return parts[-1] if parts else ""

def after_label(s: Optional[str]) -> str:
    """Value part of a 'label: value' cell, or the whole cell if there is no colon."""
    t = clean(s)
    idx = t.find(":")
    if idx >= 0:
        return clean(t[idx + 1:])
    return t

def diff_minutes(a: datetime, b: datetime) -> int:
    return int(round((b - a).total_seconds() / 60.0))

def format_duration(mins: int) -> str:
    h, m = divmod(mins, 60)
    return f"{h}h {m}m"

def try_parse_date(s: str) -> Optional[datetime]:
    try:
        return dateparser.parse(s, dayfirst=True, yearfirst=False, fuzzy=True)
    except (ValueError, OverflowError):
        return None
