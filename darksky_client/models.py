from __future__ import annotations

from typing import Any, Dict, Mapping

API_URL = "https://api.darksky.net/forecast"
DEFAULT_TIMEOUT = 10.0

CURRENT_KEY = "currently"
MINUTELY_KEY = "minutely"
HOURLY_KEY = "hourly"
DAILY_KEY = "daily"
ALERTS_KEY = "alerts"
FLAGS_KEY = "flags"

FORECAST_SECTIONS = (
    CURRENT_KEY,
    MINUTELY_KEY,
    HOURLY_KEY,
    DAILY_KEY,
    ALERTS_KEY,
    FLAGS_KEY,
)

# Query options the API understands; anything else is dropped.
ALLOWED_PARAMETERS = frozenset({"exclude", "extend", "lang", "units"})

ForecastResponse = Dict[str, Any]


def section(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Return ``data[key]``, or an empty mapping when the key is absent.

    Only a missing (or null) section falls back to the default; the value is
    otherwise returned untouched, whatever its shape.
    """

    value = data.get(key)
    if value is None:
        return {} if default is None else default
    return value
