import os
from typing import Any, Dict, Optional

import yaml

LANGUAGES = ("es", "en")

DEFAULT_OPTIONS_PATH = os.path.join(os.path.dirname(__file__), "options.yaml")

TOGGLES = ("show_duration", "show_transit", "show_class", "show_bags", "show_price")

def load_options(path: Optional[str] = None) -> Dict[str, Any]:
    """Render options from YAML; missing keys get defaults, unknown languages fall back to 'es'."""
    with open(path or DEFAULT_OPTIONS_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    data.setdefault("language", "es")
    if data["language"] not in LANGUAGES:
        data["language"] = "es"
    for key in TOGGLES:
        data.setdefault(key, True)
        data[key] = bool(data[key])
    return data
