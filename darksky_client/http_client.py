from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .errors import ApiError, TransportError
from .logging import get_logger
from .models import DEFAULT_TIMEOUT, ForecastResponse

logger = get_logger(__name__)


DEFAULT_USER_AGENT = "darksky-client/0.1 (+https://darksky.net/dev)"


class JsonFetcher:
    """Single-attempt JSON GET with a fixed timeout and API error detection."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.verify_tls = verify_tls

    def get(self, url: str) -> httpx.Response:
        headers = {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"}
        if self.client is not None:
            return self.client.get(url, headers=headers, timeout=self.timeout, follow_redirects=True)
        return httpx.get(
            url,
            headers=headers,
            timeout=self.timeout,
            follow_redirects=True,
            verify=self.verify_tls,
        )

    def fetch_json(self, url: str, *, log_context: Optional[Dict[str, Any]] = None) -> ForecastResponse:
        log_context = log_context or {}
        logger.debug("http.fetch", **log_context)
        try:
            response = self.get(url)
        except httpx.RequestError as exc:
            logger.debug(
                "http.fetch.transport_error",
                error=str(exc),
                error_type=type(exc).__name__,
                **log_context,
            )
            raise TransportError(str(exc) or type(exc).__name__, type(exc).__name__) from exc

        # Only the body decides success; a non-2xx status with a usable
        # object and no error field is returned as is.
        data = self._decode(response)
        error = data.get("error")
        if error is not None:
            code = data.get("code", response.status_code)
            logger.debug(
                "http.fetch.api_error",
                status_code=response.status_code,
                error=error,
                code=code,
                **log_context,
            )
            raise ApiError(str(error), code, status_code=response.status_code)
        return data

    @staticmethod
    def _decode(response: httpx.Response) -> ForecastResponse:
        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError(
                f"Response body is not valid JSON (HTTP {response.status_code})",
                response.status_code,
                status_code=response.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise ApiError(
                f"Expected a JSON object, got {type(data).__name__}",
                response.status_code,
                status_code=response.status_code,
            )
        return data
