"""Request execution with retry on transient HTTP statuses.

:class:`RequestExecutor` sends one logical request through a
:class:`~rbauth.client.transport.Transport` and retries it with
exponential backoff while the server answers with a status from
:data:`RETRYABLE_STATUS_CODES`.  Waiting uses :func:`asyncio.sleep`, so
other tasks on the event loop keep running during the backoff.

Transport exceptions are not retried: only a received response with a
retryable status triggers another attempt.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from rbauth.client.transport import HttpxTransport, Transport
from rbauth.exceptions import HttpError
from rbauth.models import DEFAULT_TIMEOUT, RequestOptions

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({408, 500, 502, 503, 504, 522, 524})
"""Statuses considered transient: timeouts, server errors and Cloudflare 522/524."""

DEFAULT_HEADERS = {"Content-Type": "application/json; charset=UTF-8"}


def _merge_headers(headers: dict[str, str]) -> dict[str, str]:
    """Overlay caller *headers* on :data:`DEFAULT_HEADERS`, matching names case-insensitively."""
    overridden = {name.lower() for name in headers}
    merged = {
        name: value for name, value in DEFAULT_HEADERS.items()
        if name.lower() not in overridden
    }
    merged.update(headers)
    return merged


class RequestExecutor:
    """Issues JSON requests and transparently retries transient failures.

    Args:
        transport: The HTTP collaborator.  Defaults to
            :class:`~rbauth.client.transport.HttpxTransport`.
        timeout: Per-attempt timeout in seconds handed to the transport.
            There is no deadline spanning all attempts.

    Example::

        executor = RequestExecutor(timeout=5.0)
        body = await executor.execute(
            "https://api.example.com/login",
            RequestOptions(body='{"email": "a@b.com", "password": "pw"}'),
            retries=3,
            backoff=0.3,
        )
    """

    def __init__(
        self,
        transport: Transport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport: Transport = transport or HttpxTransport()
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    async def execute(
        self,
        url: str,
        options: RequestOptions,
        retries: int,
        backoff: float,
    ) -> Any:
        """Send *options* to *url* and return the decoded JSON body.

        Up to *retries* attempts are made in total.  Before attempt ``k+1``
        the executor sleeps ``backoff * 2 ** (k - 1)`` seconds; the delay
        keeps doubling with no upper bound other than the attempt count.

        Args:
            url: Absolute request URL.
            options: Method, caller headers and pre-encoded body.  Caller
                headers override :data:`DEFAULT_HEADERS`.
            retries: Total number of attempts (values below 1 behave as 1).
            backoff: Delay in seconds before the second attempt.

        Returns:
            The JSON-decoded body of the first successful response.

        Raises:
            HttpError: On a non-retryable status, or when the last allowed
                attempt still returned a retryable status.
            NetworkError: Propagated unchanged from the transport.
        """
        request = options.model_copy(update={"headers": _merge_headers(options.headers)})
        remaining = retries
        delay = backoff
        attempt = 0

        while True:
            attempt += 1
            response = await self._transport(url, request, self._timeout)

            if response.is_success:
                return response.json()

            status = response.status_code
            if remaining > 1 and status in RETRYABLE_STATUS_CODES:
                logger.debug(
                    "%s %s returned %s, retrying in %.3fs (attempt %d, %d left)",
                    request.method, url, status, delay, attempt, remaining - 1,
                )
                await asyncio.sleep(delay)
                remaining -= 1
                delay *= 2
                continue

            if status in RETRYABLE_STATUS_CODES:
                logger.warning(
                    "%s %s still failing with %s after %d attempts",
                    request.method, url, status, attempt,
                )
            raise HttpError(status, response.reason_phrase)
