"""
Cross-segment fixes applied after extraction:
  - year rollover (a departure month going backwards means the next year)
  - overnight arrivals (arrival clock time earlier than departure -> +1 day)
  - transit time between consecutive segments
  - equal split of the fare total over the segments
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from .dates import date_from_parts, match_date_text
from .models import PnrMeta, Segment
from .money import format_money
from .utils import diff_minutes, format_duration

logger = logging.getLogger(__name__)

def apply_dates_and_transit(segments: List[Segment], base_year: Optional[int] = None) -> None:
    if not segments:
        return

    year = base_year if base_year is not None else datetime.now().year
    last_month: Optional[int] = None

    for seg in segments:
        # rollover is decided on the month alone, before any year is applied
        dep_parts = match_date_text(seg.get("dep_text"))
        if dep_parts and last_month is not None and dep_parts[1] < last_month:
            year += 1
            logger.debug("segment %s departs in an earlier month, rolling over to %s", seg.get("idx"), year)
        if dep_parts:
            last_month = dep_parts[1]

        dep = date_from_parts(dep_parts, year)
        arr = date_from_parts(match_date_text(seg.get("arr_text")), year)
        seg["dep_date"] = dep
        seg["arr_date"] = arr

        if dep and arr and arr < dep:
            seg["arr_date"] = arr + timedelta(hours=24)

    for cur, nxt in zip(segments, segments[1:]):
        a, b = cur.get("arr_date"), nxt.get("dep_date")
        if a and b:
            mins = diff_minutes(a, b)
            if mins >= 0:
                cur["transit_to_next"] = format_duration(mins)
            else:
                logger.debug("negative transit after segment %s left unset", cur.get("idx"))

def apply_per_flight_pricing(meta: PnrMeta, segments: List[Segment]) -> None:
    fare = meta.get("fare") or {}
    total_amount = fare.get("total_amount")
    currency = fare.get("currency")
    if total_amount is None or not currency or not segments:
        return

    per = total_amount / len(segments)
    for seg in segments:
        seg["price"] = {"currency": currency, "amount": per, "raw": f"{currency} {format_money(per)}"}
