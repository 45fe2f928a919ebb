from __future__ import annotations

import io
import json
import logging
from typing import Iterator

import httpx
import pytest

from darksky_client import ForecastClient, TransportError
from darksky_client.config import LoggingConfig
from darksky_client.logging import PACKAGE_LOGGER, setup_logging

API_KEY = "secret-key"


def _failing_client() -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    stream = io.StringIO()
    handler = setup_logging(LoggingConfig(level="DEBUG", json=True), stream=stream)
    yield stream
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


def test_package_logger_has_null_handler():
    handlers = logging.getLogger(PACKAGE_LOGGER).handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_failed_call_prints_nothing(capfd: pytest.CaptureFixture[str]):
    root_handlers = list(logging.getLogger().handlers)
    client = ForecastClient(API_KEY, 37.8267, -122.4233, client=_failing_client())

    with pytest.raises(TransportError):
        client.get_forecast()

    out, err = capfd.readouterr()
    assert out == ""
    assert err == ""
    assert logging.getLogger().handlers == root_handlers


def test_setup_logging_renders_json_events(log_stream: io.StringIO):
    client = ForecastClient(API_KEY, 37.8267, -122.4233, client=_failing_client())

    with pytest.raises(TransportError):
        client.get_time_machine("1555555555")

    output = log_stream.getvalue()
    events = [json.loads(line) for line in output.splitlines()]
    names = [event["event"] for event in events]
    assert names == ["forecast.request", "http.fetch", "http.fetch.transport_error", "forecast.failure"]
    assert events[-1]["code"] == "ConnectError"
    assert events[-1]["time"] == "1555555555"
    assert API_KEY not in output


def test_setup_logging_replaces_previous_handler(log_stream: io.StringIO):
    second = io.StringIO()
    handler = setup_logging(LoggingConfig(level="INFO", json=True), stream=second)
    try:
        handlers = logging.getLogger(PACKAGE_LOGGER).handlers
        assert handler in handlers
        assert sum(isinstance(h, logging.StreamHandler) for h in handlers) == 1
    finally:
        logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
