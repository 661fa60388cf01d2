import logging
import time
from typing import Callable, Dict, Tuple

from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from sentry_sender.constants import BACKOFF_MULTIPLIER, MAX_ATTEMPTS
from sentry_sender.errors import InvalidConfigurationError
from sentry_sender.models import SendResult
from sentry_sender.transport import Transport, log_api_error

logger = logging.getLogger(__name__)

PrepareRequest = Callable[[], Tuple[str, Dict[str, str]]]


def _is_failure(result: SendResult) -> bool:
    return not result.succeeded


class RetryDriver:
    """
    Runs a request up to ``max_attempts`` times with exponential backoff.

    Attempt ``n`` that fails is followed by a ``2 ** n`` second pause,
    including the last one, so a total failure costs 2 + 4 + 8 + 16 seconds.
    """

    def __init__(
        self,
        max_attempts: int = MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._wait = wait_exponential(multiplier=BACKOFF_MULTIPLIER)

    def _exhausted(self, retry_state: RetryCallState) -> SendResult:
        self._sleep(self._wait(retry_state))
        logger.warning(
            "Giving up on Sentry event after %d attempts", retry_state.attempt_number
        )
        return SendResult.error()

    def run(
        self,
        transport: Transport,
        method: str,
        prepare: PrepareRequest,
        body: str,
    ) -> SendResult:
        """
        Send ``body`` until it is accepted or the attempts run out.

        ``prepare`` is called before each attempt and returns the endpoint and
        freshly signed headers.

        Returns:
            SendResult: The first ok result, or error.
        """

        def attempt() -> SendResult:
            url, headers = prepare()
            return transport.request(method, url, headers, body)

        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=retry_if_result(_is_failure),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            retry_error_callback=self._exhausted,
        )

        try:
            return retrying(attempt)
        except InvalidConfigurationError as e:
            log_api_error(e.message)
            return SendResult.error()
