from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import ParseResult, Segment
from .money import format_money

LABELS: Dict[str, Dict[str, str]] = {
    "es": {
        "passengers": "Pasajeros", "bags": "Equipaje", "fare": "Tarifa", "taxes": "Impuestos",
        "total": "Total", "per_flight": "Por vuelo", "price": "Precio", "leaving": "Saliendo",
        "arriving": "Llegando", "duration": "Duración", "stops": "Escalas", "class": "Clase",
        "transit": "Tiempo de conexión", "no_segments": "No se detectaron segmentos de vuelo.",
    },
    "en": {
        "passengers": "Passengers", "bags": "Baggage", "fare": "Fare", "taxes": "Taxes",
        "total": "Total", "per_flight": "Per flight", "price": "Price", "leaving": "Leaving",
        "arriving": "Arriving", "duration": "Duration", "stops": "Stops", "class": "Class",
        "transit": "Transit time", "no_segments": "No flight segments detected.",
    },
}

def labels(lang: Optional[str]) -> Dict[str, str]:
    return LABELS.get(lang or "es", LABELS["es"])

def _title(seg: Segment, options: Dict[str, Any]) -> str:
    bits = [seg.get("dep_text"), seg.get("airline"), seg.get("flight_number")]
    if options.get("show_class"):
        bits.append(seg.get("cabin"))
    if options.get("show_duration"):
        bits.append(seg.get("duration"))
    if options.get("show_price") and seg.get("price"):
        bits.append(seg["price"].get("raw"))
    return " ".join(b for b in bits if b)

def render_text(result: ParseResult, options: Dict[str, Any]) -> str:
    """Plain-text itinerary, the copy-paste form of a conversion."""
    L = labels(options.get("language"))
    meta = result.get("meta") or {}
    segments = result.get("segments") or []
    lines: List[str] = []

    fare = meta.get("fare") or {}
    if fare.get("total"):
        lines.append(f"{L['total']}: {fare['total']}")
        if fare.get("total_amount") is not None and fare.get("currency") and segments:
            per = fare["total_amount"] / len(segments)
            lines.append(f"{L['per_flight']}: {fare['currency']} {format_money(per)}")
        lines.append("")

    if meta.get("passengers"):
        lines.append(f"{L['passengers']}: {meta['passengers']}")
    if meta.get("bags"):
        lines.append(f"{L['bags']}: {meta['bags']}")
    if meta.get("passengers") or meta.get("bags"):
        lines.append("")

    if not segments:
        lines.append(L["no_segments"])

    for i, s in enumerate(segments):
        lines.append(f"#{i + 1} {_title(s, options)}".rstrip())
        if s.get("from"):
            lines.append(f"{L['leaving']}: {s['from']} ({s['dep_text']})" if s.get("dep_text") else f"{L['leaving']}: {s['from']}")
        if s.get("to"):
            lines.append(f"{L['arriving']}: {s['to']} ({s['arr_text']})" if s.get("arr_text") else f"{L['arriving']}: {s['to']}")
        if options.get("show_price") and s.get("price"):
            lines.append(f"{L['price']}: {s['price']['raw']}")
        if options.get("show_duration") and s.get("duration"):
            lines.append(f"{L['duration']}: {s['duration']}")
        if options.get("show_class") and s.get("cabin"):
            lines.append(f"{L['class']}: {s['cabin']}")
        if s.get("stops"):
            lines.append(f"{L['stops']}: {s['stops']}")
        bags = s.get("bags") or meta.get("bags")
        if options.get("show_bags") and bags:
            lines.append(f"{L['bags']}: {bags}")
        if options.get("show_transit") and s.get("transit_to_next"):
            lines.append(f"{L['transit']}: {s['transit_to_next']}")
        lines.append("")

    return "\n".join(lines).strip()

def to_jsonable(obj: Any) -> Any:
    """Datetimes -> ISO strings, recursively, so a ParseResult can go through json.dumps."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj
