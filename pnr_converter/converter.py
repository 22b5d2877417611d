import logging
from typing import Optional

from bs4 import BeautifulSoup

from .classifier import MARKUP, detect_format
from .extractors import (
    detect_bags,
    detect_passengers,
    extract_fare_from_html,
    parse_html_segments,
    parse_raw_segments,
)
from .models import ParseResult, PnrMeta
from .reconciler import apply_dates_and_transit, apply_per_flight_pricing
from .utils import clean

logger = logging.getLogger(__name__)

def _meta_from_text(text: str) -> PnrMeta:
    meta: PnrMeta = {}
    passengers = detect_passengers(text)
    if passengers is not None:
        meta["passengers"] = passengers
    bags = detect_bags(text)
    if bags:
        meta["bags"] = bags
    return meta

def parse_html_pnr(html: str, base_year: Optional[int] = None) -> ParseResult:
    soup = BeautifulSoup(html, "html.parser")
    for s in soup(["script", "style"]):
        s.decompose()

    meta = _meta_from_text(clean(soup.get_text(separator=" ")))
    fare = extract_fare_from_html(soup)
    if fare:
        meta["fare"] = fare

    segments = parse_html_segments(soup)
    logger.debug("markup input: %d segment(s)", len(segments))
    apply_dates_and_transit(segments, base_year)
    apply_per_flight_pricing(meta, segments)
    return {"meta": meta, "segments": segments}

def parse_raw_pnr(raw: str, base_year: Optional[int] = None) -> ParseResult:
    meta = _meta_from_text(raw)
    segments = parse_raw_segments(raw)
    logger.debug("raw input: %d segment(s)", len(segments))
    apply_dates_and_transit(segments, base_year)
    return {"meta": meta, "segments": segments}

def convert(text: str, base_year: Optional[int] = None) -> ParseResult:
    """Classify the input and run the matching parser. Never raises on bad input."""
    t = (text or "").strip()
    if not t:
        return {"meta": {}, "segments": []}
    if detect_format(t) == MARKUP:
        return parse_html_pnr(t, base_year)
    return parse_raw_pnr(t, base_year)
