"""Client for the Dark Sky forecast and time machine endpoints.

Example::

    from darksky_client import ForecastClient

    client = ForecastClient("my-key", 37.8267, -122.4233, {"units": "si"})
    client.get_current_forecast()["temperature"]
    client.get_daily_time_machine("1555555555")

Every accessor issues its own request; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import httpx

from .config import ClientSettings, app_config
from .errors import API_KEY_REQUIRED, COORDINATES_REQUIRED, TIME_REQUIRED, DarkSkyError, ValidationError
from .http_client import JsonFetcher
from .logging import get_logger
from .models import (
    ALERTS_KEY,
    ALLOWED_PARAMETERS,
    API_URL,
    CURRENT_KEY,
    DAILY_KEY,
    DEFAULT_TIMEOUT,
    FLAGS_KEY,
    HOURLY_KEY,
    MINUTELY_KEY,
    ForecastResponse,
    section,
)

logger = get_logger(__name__)

Number = Union[int, float]
Timestamp = Union[str, int]


def filter_parameters(parameters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Keep allowed, scalar-valued options and render them as strings.

    Container values are dropped without error, as are ``None`` values.
    Booleans become ``"1"``/``"0"``.
    """

    filtered: Dict[str, str] = {}
    for key, value in (parameters or {}).items():
        if key not in ALLOWED_PARAMETERS:
            continue
        if value is None or isinstance(value, (list, tuple, set, frozenset, Mapping)):
            continue
        if isinstance(value, bool):
            filtered[key] = "1" if value else "0"
        else:
            filtered[key] = str(value)
    return filtered


class ForecastClient:
    """Fetches forecasts for one location with one API key.

    The client is read-only once built, so a single instance can be shared
    across threads.
    """

    def __init__(
        self,
        api_key: str,
        latitude: Number,
        longitude: Number,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        verify_tls: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = API_URL,
        client: Optional[httpx.Client] = None,
    ) -> None:
        if api_key is None or not str(api_key).strip():
            raise ValidationError("api key is required", API_KEY_REQUIRED)
        if latitude is None or longitude is None:
            raise ValidationError("latitude and longitude are required", COORDINATES_REQUIRED)

        self._api_key = api_key
        self._latitude = latitude
        self._longitude = longitude
        self._parameters = filter_parameters(parameters)
        self._base_url = base_url.rstrip("/")
        self._fetcher = JsonFetcher(client, timeout=timeout, verify_tls=verify_tls)

    @classmethod
    def from_config(
        cls,
        latitude: Number,
        longitude: Number,
        *,
        settings: Optional[ClientSettings] = None,
        client: Optional[httpx.Client] = None,
    ) -> "ForecastClient":
        settings = settings or app_config.client
        return cls(
            settings.api_key,
            latitude,
            longitude,
            settings.parameters,
            verify_tls=settings.verify_tls,
            timeout=settings.timeout,
            base_url=settings.base_url,
            client=client,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def latitude(self) -> Number:
        return self._latitude

    @property
    def longitude(self) -> Number:
        return self._longitude

    @property
    def parameters(self) -> Dict[str, str]:
        return dict(self._parameters)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._fetcher.timeout

    @property
    def verify_tls(self) -> bool:
        return self._fetcher.verify_tls

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(latitude={self._latitude!r}, longitude={self._longitude!r}, "
            f"parameters={self._parameters!r})"
        )

    def query_string(self) -> str:
        return str(httpx.QueryParams(self._parameters))

    def build_url(self, time: Optional[Timestamp] = None) -> str:
        location = f"{self._latitude},{self._longitude}"
        if time is not None:
            location = f"{location},{time}"
        url = f"{self._base_url}/{self._api_key}/{location}"
        query = self.query_string()
        return f"{url}?{query}" if query else url

    def _call_api(self, time: Optional[Timestamp] = None) -> ForecastResponse:
        log_context = {"latitude": self._latitude, "longitude": self._longitude, "time": time}
        logger.info("forecast.request", **log_context)
        try:
            data = self._fetcher.fetch_json(self.build_url(time), log_context=log_context)
        except DarkSkyError as exc:
            logger.debug("forecast.failure", error=exc.message, code=exc.code, **log_context)
            raise
        logger.info("forecast.success", sections=sorted(data), **log_context)
        return data

    # Forecast requests

    def get_forecast(self) -> ForecastResponse:
        """Fetch the full forecast for the configured location."""
        return self._call_api()

    def get_current_forecast(self) -> Any:
        return section(self.get_forecast(), CURRENT_KEY)

    def get_minutely_forecast(self) -> Any:
        return section(self.get_forecast(), MINUTELY_KEY)

    def get_hourly_forecast(self) -> Any:
        return section(self.get_forecast(), HOURLY_KEY)

    def get_daily_forecast(self) -> Any:
        return section(self.get_forecast(), DAILY_KEY)

    def get_forecast_alerts(self) -> Any:
        return section(self.get_forecast(), ALERTS_KEY)

    def get_forecast_flags(self) -> Any:
        return section(self.get_forecast(), FLAGS_KEY)

    # Time machine requests

    def get_time_machine(self, time: Timestamp) -> ForecastResponse:
        """Fetch conditions at ``time`` (UNIX seconds or ISO 8601 string).

        Raises:
            ValidationError: ``time`` is missing or blank.
        """
        if time is None or not str(time).strip():
            raise ValidationError("time is required for time machine requests", TIME_REQUIRED)
        return self._call_api(time)

    def get_current_time_machine(self, time: Timestamp) -> Any:
        return section(self.get_time_machine(time), CURRENT_KEY)

    def get_minutely_time_machine(self, time: Timestamp) -> Any:
        return section(self.get_time_machine(time), MINUTELY_KEY)

    def get_hourly_time_machine(self, time: Timestamp) -> Any:
        return section(self.get_time_machine(time), HOURLY_KEY)

    def get_daily_time_machine(self, time: Timestamp) -> Any:
        return section(self.get_time_machine(time), DAILY_KEY)
