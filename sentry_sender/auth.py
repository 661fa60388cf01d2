import time
from typing import Dict, Optional

from sentry_sender.constants import (
    SENTRY_AUTH_HEADER,
    SENTRY_AUTH_SCHEME,
    SENTRY_VERSION,
)
from sentry_sender.meta import get_client_identifier


def unix_timestamp() -> int:
    return int(time.time())


def authorization_header(
    public_key: str, secret_key: str, timestamp: Optional[int] = None
) -> str:
    """
    Generate a Sentry API authorization header.

    The timestamp is taken from the wall clock on every call unless given.

    Args:
        public_key (str): The DSN public key.
        secret_key (str): The DSN secret key.
        timestamp (Optional[int]): Unix timestamp in seconds.

    Returns:
        str: The header value, e.g. ``Sentry sentry_version=5, ...``.
    """
    if timestamp is None:
        timestamp = unix_timestamp()

    data = [
        ("sentry_version", SENTRY_VERSION),
        ("sentry_client", get_client_identifier()),
        ("sentry_timestamp", timestamp),
        ("sentry_key", public_key),
        ("sentry_secret", secret_key),
    ]
    query = ", ".join(f"{name}={value}" for name, value in data)

    return f"{SENTRY_AUTH_SCHEME} {query}"


def authorization_headers(public_key: str, secret_key: str) -> Dict[str, str]:
    """
    Build the full header set for a store request.
    """
    return {
        "User-Agent": get_client_identifier(),
        SENTRY_AUTH_HEADER: authorization_header(public_key, secret_key),
    }
