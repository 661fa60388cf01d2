"""
HTTP delivery of encoded events over shared, named connection pools.
"""

import logging
import threading
from typing import Dict, Optional

import httpx

from sentry_sender.config import TransportOptions, get_verify_context
from sentry_sender.constants import LOG_API_ERROR_PREFIX, SENTRY_ERROR_HEADER
from sentry_sender.errors import TransportError
from sentry_sender.models import SendResult

logger = logging.getLogger(__name__)

_pools: Dict[str, httpx.Client] = {}
_pool_users: Dict[str, int] = {}
_pools_lock = threading.Lock()


def log_api_error(body: str) -> None:
    logger.warning("%s\n%s", LOG_API_ERROR_PREFIX, body)


def _create_http_client(options: TransportOptions) -> httpx.Client:
    """
    Create the HTTP client backing one named pool.
    """
    client_kwargs = {
        "verify": get_verify_context(options.ca_bundle),
        "headers": {"Content-Type": "application/json"},
        "timeout": httpx.Timeout(options.timeout),
        "limits": httpx.Limits(
            max_connections=options.max_connections,
            max_keepalive_connections=options.max_keepalive_connections,
        ),
        "trust_env": False,
    }

    if options.proxy:
        client_kwargs["proxy"] = options.proxy.as_url()

    return httpx.Client(**client_kwargs)


def get_pool(options: TransportOptions) -> httpx.Client:
    """
    Get the shared HTTP client for ``options.pool_name``, creating it on first use.

    The first caller's options win, later callers reuse the same connections.
    """
    with _pools_lock:
        client = _pools.get(options.pool_name)

        if client is None or client.is_closed:
            logger.debug("Creating HTTP pool %s", options.pool_name)
            client = _create_http_client(options)
            _pools[options.pool_name] = client

        return client


def retain_pool(pool_name: str) -> None:
    """
    Register one more owner of ``pool_name``.
    """
    with _pools_lock:
        _pool_users[pool_name] = _pool_users.get(pool_name, 0) + 1


def release_pool(pool_name: str) -> None:
    """
    Drop one owner of ``pool_name``, closing the pool once nobody holds it.
    """
    with _pools_lock:
        users = _pool_users.get(pool_name, 0) - 1
        if users > 0:
            _pool_users[pool_name] = users
            return
        _pool_users.pop(pool_name, None)

    close_pool(pool_name)


def close_pool(pool_name: str) -> None:
    with _pools_lock:
        client = _pools.pop(pool_name, None)

    if client is not None:
        client.close()
        logger.debug("HTTP pool %s closed", pool_name)


def close_pools() -> None:
    with _pools_lock:
        _pool_users.clear()

    for pool_name in list(_pools):
        close_pool(pool_name)


class Transport:
    """
    Sends one request and classifies the response.

    Every failure, whatever its cause, is reported as an error result. Only
    the retry driver decides what happens next.
    """

    def __init__(
        self,
        options: Optional[TransportOptions] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.options = options or TransportOptions()
        self._http_client = http_client

    @property
    def client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client

        return get_pool(self.options)

    def request(
        self, method: str, url: str, headers: Dict[str, str], body: str
    ) -> SendResult:
        """
        Make the HTTP request to Sentry.

        Args:
            method (str): The HTTP method.
            url (str): The store endpoint.
            headers (Dict[str, str]): Authentication headers.
            body (str): The encoded event.

        Returns:
            SendResult: ok with the remote event id on HTTP 200, error otherwise.
        """
        try:
            response = self.client.request(method, url, headers=headers, content=body)
        except (httpx.HTTPError, RuntimeError) as e:
            # RuntimeError: the pool was closed under this request
            log_api_error(str(TransportError(body=body, reason=repr(e))))
            return SendResult.error()

        if response.status_code == 200:
            try:
                data = response.json()
            except ValueError as e:
                log_api_error(f"{body}\nInvalid JSON in Sentry response: {e}")
                return SendResult.error()

            if not isinstance(data, dict):
                log_api_error(f"{body}\nUnexpected Sentry response: {response.text}")
                return SendResult.error()

            return SendResult.ok(data.get("id"))

        error = TransportError(
            status_code=response.status_code,
            body=body,
            error_header=response.headers.get(SENTRY_ERROR_HEADER, ""),
        )
        log_api_error(str(error))
        return SendResult.error()
