from __future__ import annotations

from typing import Optional, Union

ErrorCode = Union[int, str, None]

API_KEY_REQUIRED = 1000
COORDINATES_REQUIRED = 1001
TIME_REQUIRED = 1002


class DarkSkyError(Exception):
    """Base class for every error raised by the client.

    Carries the human readable ``message`` and a ``code``. The code is an
    integer for validation and API failures and the transport exception
    name for network failures.
    """

    def __init__(self, message: str, code: ErrorCode = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (code={self.code})"


class ValidationError(DarkSkyError):
    """A required input was missing or blank. Raised before any request."""


class TransportError(DarkSkyError):
    """The request never produced an HTTP response (connection, timeout)."""


class ApiError(DarkSkyError):
    """The API answered, but with an error payload or an unusable body."""

    def __init__(self, message: str, code: ErrorCode = None, *, status_code: Optional[int] = None) -> None:
        super().__init__(message, code)
        self.status_code = status_code
