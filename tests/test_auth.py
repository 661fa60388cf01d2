from unittest.mock import patch

import pytest

from sentry_sender.auth import (
    authorization_header,
    authorization_headers,
    unix_timestamp,
)
from sentry_sender.meta import get_client_identifier


@pytest.mark.unit
class TestAuthorizationHeader:
    """
    Test X-Sentry-Auth header generation.
    """

    def test_fields_in_order(self) -> None:
        header = authorization_header("pub", "sec", timestamp=1700000000)

        assert header == (
            "Sentry sentry_version=5, "
            f"sentry_client={get_client_identifier()}, "
            "sentry_timestamp=1700000000, "
            "sentry_key=pub, "
            "sentry_secret=sec"
        )

    def test_unix_timestamp_truncates_to_seconds(self) -> None:
        with patch("sentry_sender.auth.time.time", return_value=100.7):
            assert unix_timestamp() == 100

    def test_timestamp_taken_on_each_call(self) -> None:
        with patch("sentry_sender.auth.unix_timestamp", side_effect=[100, 205]):
            first = authorization_header("pub", "sec")
            second = authorization_header("pub", "sec")

        assert "sentry_timestamp=100," in first
        assert "sentry_timestamp=205," in second

    def test_same_second_gives_identical_headers(self) -> None:
        with patch("sentry_sender.auth.unix_timestamp", return_value=100):
            assert authorization_header("a", "b") == authorization_header("a", "b")

    def test_headers_include_user_agent(self) -> None:
        headers = authorization_headers("pub", "sec")

        assert headers["User-Agent"] == get_client_identifier()
        assert headers["X-Sentry-Auth"].startswith("Sentry sentry_version=5, ")
        assert "sentry_key=pub" in headers["X-Sentry-Auth"]
