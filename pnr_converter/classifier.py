from typing import Dict, Tuple

import regex as re

MARKUP = "markup"
RAW = "raw"

_HTML_TAG_RE = re.compile(r"(?i)<html")
_RAW_LINE_RE = re.compile(r"(?im)^\s*\d+\s+[A-Z0-9]{2,3}\s*\d{1,4}[A-Z]?\s+[A-Z]\s+\d{1,2}[A-Z]{3}\b")

def detect_format(text: str) -> str:
    """'markup' when the input starts with '<' or has an <html tag, otherwise 'raw'."""
    t = (text or "").strip()
    if t.startswith("<") or _HTML_TAG_RE.search(t):
        return MARKUP
    return RAW

def format_hints(text: str) -> Tuple[str, Dict[str, int]]:
    """
    Return (format, counts) where counts gives a rough idea of what the
    input contains: html tags, table rows and RAW-looking segment lines.
    """
    t = text or ""
    counts = {
        "tags": len(re.findall(r"<[A-Za-z/][^>]*>", t)),
        "rows": len(re.findall(r"(?i)<tr\b", t)),
        "raw_lines": len(_RAW_LINE_RE.findall(t)),
    }
    return detect_format(t), counts
