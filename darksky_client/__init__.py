"""Minimal client for the Dark Sky weather forecast API."""

from .client import ForecastClient, filter_parameters
from .errors import ApiError, DarkSkyError, TransportError, ValidationError
from .models import FORECAST_SECTIONS, ForecastResponse, section

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "DarkSkyError",
    "FORECAST_SECTIONS",
    "ForecastClient",
    "ForecastResponse",
    "TransportError",
    "ValidationError",
    "filter_parameters",
    "section",
]
