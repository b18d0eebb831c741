"""HTTP transport collaborator.

The :class:`~rbauth.client.executor.RequestExecutor` never talks to the
network directly; it calls a :class:`Transport`.  Any async callable with
the right signature qualifies, which is how tests and hosts plug in their
own HTTP stack.  The response type is :class:`httpx.Response`: its
``is_success``, ``status_code``, ``reason_phrase`` and ``json()`` members
are the only ones the pipeline reads.

:class:`HttpxTransport` is the default implementation, backed by
:class:`httpx.AsyncClient`.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from rbauth.exceptions import NetworkError
from rbauth.models import RequestOptions

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Sends one HTTP request and returns the raw response.

    Implementations raise :class:`~rbauth.exceptions.NetworkError` for
    transport-level failures and return every HTTP response, whatever its
    status, unchanged.
    """

    async def __call__(
        self, url: str, options: RequestOptions, timeout: float
    ) -> httpx.Response: ...


class HttpxTransport:
    """Default transport backed by :class:`httpx.AsyncClient`.

    A client is created per request unless one is supplied, so an instance
    is safe to share between event loops.

    Args:
        client: Optional pre-configured client (custom TLS, proxies,
            :class:`httpx.MockTransport` in tests).  It is not closed by
            this transport.
        verify: TLS verification flag used for internally created clients.

    Example::

        transport = HttpxTransport()
        response = await transport(
            "https://api.example.com/login",
            RequestOptions(body='{"email": "a@b.com"}'),
            timeout=5.0,
        )
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        verify: bool = True,
    ) -> None:
        self._client = client
        self._verify = verify

    async def __call__(
        self, url: str, options: RequestOptions, timeout: float
    ) -> httpx.Response:
        if self._client is not None:
            return await self._send(self._client, url, options, timeout)
        async with httpx.AsyncClient(verify=self._verify, follow_redirects=True) as client:
            return await self._send(client, url, options, timeout)

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        options: RequestOptions,
        timeout: float,
    ) -> httpx.Response:
        try:
            return await client.request(
                options.method,
                url,
                headers=options.headers,
                content=options.body,
                timeout=timeout,
            )
        except httpx.TransportError as exc:
            logger.debug("Transport failure for %s %s: %s", options.method, url, exc)
            raise NetworkError(f"{options.method} {url} failed: {exc}") from exc
