"""Bounded retry policy for outbound HTTP calls."""

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


def transport_retrying(max_attempts: int, max_wait: float) -> AsyncRetrying:
    """
    Build a retry loop for transport-level failures only.

    Connection errors and timeouts are retried with exponential backoff.
    HTTP error responses are returned to the caller untouched.

    Usage:
        async for attempt in transport_retrying(3, 10.0):
            with attempt:
                response = await client.get(url)
    """
    return AsyncRetrying(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=0.5, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
