import sys
from typing import Optional, Tuple

ENCODINGS = ("utf-8-sig", "cp1252")

def load_pnr_text(path: str) -> Tuple[str, Optional[str]]:
    """
    Return (text, error). '-' reads stdin. Tries utf-8 first (a leading BOM is dropped), then the
    Windows code page reservation terminals usually export with.
    """
    if path == "-":
        return sys.stdin.read().lstrip("\ufeff"), None

    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        return "", f"read_error: {e}"

    err = None
    for enc in ENCODINGS:
        try:
            return data.decode(enc), None
        except UnicodeDecodeError as e:
            err = f"decode_error: {e}"
    return "", err
