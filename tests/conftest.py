from typing import List

import httpx
import pytest

from sentry_sender.transport import Transport



def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")


class SleepRecorder:
    """
    Stand-in for time.sleep that records the requested delays.
    """

    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """
    Remove SENTRY_* variables and point the config file at an empty location.
    """
    for name in (
        "SENTRY_DSN",
        "SENTRY_SAMPLE_RATE",
        "SENTRY_BEFORE_SEND",
        "SENTRY_AFTER_SEND",
        "SENTRY_WORKERS",
        "SENTRY_ENVIRONMENT",
        "SENTRY_RELEASE",
        "SENTRY_SERVER_NAME",
        "SENTRY_POOL_NAME",
        "SENTRY_REQUEST_TIMEOUT",
        "SENTRY_CA_BUNDLE",
    ):
        monkeypatch.delenv(name, raising=False)

    return tmp_path / "config.ini"


@pytest.fixture
def mock_transport_factory():
    """
    Factory for a Transport backed by httpx.MockTransport.

    The handler receives each httpx.Request and returns an httpx.Response.
    Every request seen is appended to the returned list.
    """

    def _create(handler):
        requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(_record))
        return Transport(http_client=http_client), requests

    return _create
