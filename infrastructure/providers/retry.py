import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

logger = logging.getLogger(__name__)


def is_retryable_status(status_code: int) -> bool:
    return status_code >= 500 or status_code == 429


def default_wait() -> wait_base:
    return wait_exponential_jitter(initial=0.5, max=4.0, jitter=0.5)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry and backoff rules owned by a rate source client.

    Transport failures and responses whose status satisfies
    ``retryable_status`` are retried up to ``max_retries`` times. The default
    exponential backoff with jitter sleeps 0.5s, 1s, 2s (plus up to 0.5s of
    jitter each), so three retries add at most 5s on top of the per-request
    timeouts. Cancellation is never retried.
    """

    max_retries: int = 3
    wait: wait_base = field(default_factory=default_wait)
    retryable_status: Callable[[int], bool] = is_retryable_status

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError('max_retries must not be negative')

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def should_retry(self, exc: BaseException) -> bool:
        if isinstance(exc, httpx.HTTPStatusError):
            return self.retryable_status(exc.response.status_code)
        return isinstance(exc, httpx.TransportError)

    def retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=retry_if_exception(self.should_retry),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    @classmethod
    def from_settings(cls, settings) -> 'RetryPolicy':
        return cls(
            max_retries=settings.RETRY_MAX_RETRIES,
            wait=wait_exponential_jitter(
                initial=settings.RETRY_BACKOFF_INITIAL,
                max=settings.RETRY_BACKOFF_MAX,
                jitter=settings.RETRY_BACKOFF_JITTER,
            ),
        )
