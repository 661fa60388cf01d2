"""
The Sentry client: sampling, hooks, encoding and dispatch of events.

Delivery can run on the caller's thread (``sync``), on the client's worker
pool with a handle to the outcome (``async``, the default), or on the pool
with no way to learn the outcome (``none``). ``none`` gives no delivery
guarantee and no error visibility: the event is attempted up to four times
and then dropped.
"""

import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, Tuple, Union

from sentry_sender.auth import authorization_headers
from sentry_sender.config import SenderConfig
from sentry_sender.dsn import Credentials, parse_dsn
from sentry_sender.encoding import encode_event
from sentry_sender.errors import EncodingError, InvalidConfigurationError
from sentry_sender.hooks import call_after_send, call_before_send
from sentry_sender.models import DispatchMode, Event, SendResult
from sentry_sender.retry import RetryDriver
from sentry_sender.sampling import sample_event
from sentry_sender.transport import (
    Transport,
    log_api_error,
    release_pool,
    retain_pool,
)

logger = logging.getLogger(__name__)

Mode = Union[DispatchMode, str]


class Client:
    """
    Sends events to the Sentry store endpoint.

    The configuration is an immutable snapshot. ``configure`` swaps it for a
    new one, and every ``send`` works with the snapshot current when it was
    called. The DSN is parsed again before every attempt so a rotated key is
    picked up by deliveries already in flight.
    """

    def __init__(
        self,
        config: Optional[SenderConfig] = None,
        transport: Optional[Transport] = None,
        executor: Optional[Executor] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._config = config or SenderConfig()
        self._config_lock = threading.Lock()

        self._owns_transport = transport is None
        self.transport = transport or Transport(self._config.transport)
        if self._owns_transport:
            retain_pool(self.transport.options.pool_name)
        self._closed = False

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self._config.workers, thread_name_prefix="sentry-sender"
        )

        self._retry = RetryDriver(sleep=sleep)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def config(self) -> SenderConfig:
        return self._config

    def configure(self, **changes: Any) -> SenderConfig:
        """
        Replace the configuration snapshot.

        Args:
            **changes: SenderConfig fields to change.

        Returns:
            SenderConfig: The new snapshot.
        """
        with self._config_lock:
            config = self._config.with_changes(**changes)

            if self._owns_transport and config.transport != self._config.transport:
                previous = self.transport
                self.transport = Transport(config.transport)
                retain_pool(self.transport.options.pool_name)
                release_pool(previous.options.pool_name)

            self._config = config

        return config

    def resolve_credentials(self) -> Optional[Credentials]:
        """
        Parse the configured DSN.

        Returns:
            Optional[Credentials]: The endpoint and key pair, or None if the
                DSN is invalid.
        """
        try:
            return parse_dsn(self.config.dsn)
        except InvalidConfigurationError as e:
            log_api_error(e.message)
            return None

    def _prepare_request(self) -> Tuple[str, Dict[str, str]]:
        credentials = parse_dsn(self.config.dsn)
        return credentials.endpoint, authorization_headers(
            credentials.public_key, credentials.secret_key
        )

    def send(
        self,
        event: Any,
        result: Optional[Mode] = None,
        sample_rate: Optional[float] = None,
    ) -> SendResult:
        """
        Attempt to send an event up to 4 times with exponential backoff.

        The event is dropped if all attempts fail.

        Args:
            event: An Event model or a mapping.
            result: ``sync`` to block and get the remote id, ``async`` (default)
                to get a pending result wrapping a future, ``none`` to get
                ``ok("")`` straight away whatever happens next.
            sample_rate: Fraction of events to send, defaults to the configured rate.

        Returns:
            SendResult: ok, error, unsampled or pending.

        Raises:
            ValueError: If ``result`` is not a known mode.
        """
        config = self.config
        mode = DispatchMode(result) if result is not None else DispatchMode.ASYNC
        if sample_rate is None:
            sample_rate = config.sample_rate

        event = call_before_send(config.before_send, event)

        if not sample_event(sample_rate):
            return SendResult.unsampled()

        try:
            body = encode_event(event)
        except EncodingError as e:
            log_api_error(e.message)
            return SendResult.error()

        return self._dispatch(event, body, mode, config)

    def _dispatch(
        self, event: Any, body: str, mode: DispatchMode, config: SenderConfig
    ) -> SendResult:
        if self.resolve_credentials() is None:
            return SendResult.error()

        transport = self.transport

        def deliver() -> SendResult:
            result = self._retry.run(transport, "POST", self._prepare_request, body)
            return call_after_send(config.after_send, event, result)

        if mode is DispatchMode.SYNC:
            return deliver()

        try:
            future = self._executor.submit(self._run_detached, deliver)
        except RuntimeError:
            logger.warning("Sentry client is closed, dropping event")
            return SendResult.error()

        if mode is DispatchMode.ASYNC:
            return SendResult.pending(future)

        return SendResult.ok("")

    @staticmethod
    def _run_detached(deliver: Callable[[], SendResult]) -> SendResult:
        try:
            return deliver()
        except Exception:
            logger.exception("Detached delivery of Sentry event crashed")
            return SendResult.error()

    def _new_event(self, **kwargs: Any) -> Dict[str, Any]:
        config = self.config
        for name in ("environment", "release", "server_name"):
            if kwargs.get(name) is None and getattr(config, name) is not None:
                kwargs[name] = getattr(config, name)
        return kwargs

    def capture_exception(
        self,
        exc: BaseException,
        result: Optional[Mode] = None,
        sample_rate: Optional[float] = None,
        **event_fields: Any,
    ) -> SendResult:
        """
        Build an event from ``exc`` and send it. See `send` for the options.
        """
        event = Event.from_exception(exc, **self._new_event(**event_fields))
        return self.send(event, result=result, sample_rate=sample_rate)

    def capture_message(
        self,
        message: str,
        result: Optional[Mode] = None,
        sample_rate: Optional[float] = None,
        **event_fields: Any,
    ) -> SendResult:
        """
        Send a plain message event. See `send` for the options.
        """
        event_fields.setdefault("level", "info")
        event = Event(message=message, **self._new_event(**event_fields))
        return self.send(event, result=result, sample_rate=sample_rate)

    def close(self, wait: bool = True) -> None:
        """
        Stop the worker pool and release the HTTP pool.

        Args:
            wait (bool): Wait for detached deliveries to finish first.
        """
        with self._config_lock:
            if self._closed:
                return
            self._closed = True

        if self._owns_executor:
            self._executor.shutdown(wait=wait)

        if self._owns_transport:
            release_pool(self.transport.options.pool_name)
