"""Typed result structures shared by the extractors, reconciler and renderer."""
from datetime import datetime
from typing import List, Optional, TypedDict

class Money(TypedDict):
    currency: str
    amount: float

class FareSummary(TypedDict, total=False):
    currency: Optional[str]
    base: Optional[str]
    taxes: Optional[str]
    total: Optional[str]
    base_amount: Optional[float]
    taxes_amount: Optional[float]
    total_amount: Optional[float]

class PnrMeta(TypedDict, total=False):
    passengers: Optional[int]
    bags: Optional[str]
    fare: Optional[FareSummary]
    policies: List[str]

class SegmentPrice(TypedDict, total=False):
    raw: str
    amount: float
    currency: str

# "from" is a keyword, hence the functional form
Segment = TypedDict("Segment", {
    "idx": int,
    "airline": Optional[str],
    "flight_number": Optional[str],
    "cabin": Optional[str],
    "from": Optional[str],
    "to": Optional[str],
    "dep_text": Optional[str],
    "arr_text": Optional[str],
    "dep_date": Optional[datetime],
    "arr_date": Optional[datetime],
    "duration": Optional[str],
    "stops": Optional[str],
    "equip": Optional[str],
    "operated_by": Optional[str],
    "seat": Optional[str],
    "bags": Optional[str],
    "transit_to_next": Optional[str],
    "price": Optional[SegmentPrice],
}, total=False)

class ParseResult(TypedDict):
    meta: PnrMeta
    segments: List[Segment]
