"""
Process-wide default client.
"""

import logging
import threading
from typing import Any, Optional

from sentry_sender.client import Client, Mode
from sentry_sender.config import SenderConfig, load_config
from sentry_sender.dsn import Credentials
from sentry_sender.models import SendResult

LOG = logging.getLogger(__name__)

_client: Optional[Client] = None
_client_lock = threading.Lock()


def init(config: Optional[SenderConfig] = None, **settings: Any) -> Client:
    """
    Create the default client, replacing any previous one.

    Args:
        config: A ready configuration, resolved with `load_config` when omitted.
        **settings: Arguments for `load_config`.

    Returns:
        Client: The new default client.
    """
    global _client

    if config is None:
        config = load_config(**settings)

    client = Client(config)

    with _client_lock:
        previous, _client = _client, client

    if previous is not None:
        LOG.debug("Replacing default Sentry client")
        previous.close(wait=False)

    return client


def get_client() -> Client:
    """
    Get the default client, creating it from `load_config` on first use.
    """
    global _client

    with _client_lock:
        if _client is None:
            _client = Client(load_config())

        return _client


def send_event(
    event: Any, result: Optional[Mode] = None, sample_rate: Optional[float] = None
) -> SendResult:
    return get_client().send(event, result=result, sample_rate=sample_rate)


def capture_exception(exc: BaseException, **kwargs: Any) -> SendResult:
    return get_client().capture_exception(exc, **kwargs)


def capture_message(message: str, **kwargs: Any) -> SendResult:
    return get_client().capture_message(message, **kwargs)


def resolve_credentials() -> Optional[Credentials]:
    return get_client().resolve_credentials()


def shutdown(wait: bool = True) -> None:
    global _client

    with _client_lock:
        client, _client = _client, None

    if client is not None:
        client.close(wait=wait)
