"""HTTP layer for rbauth.

Provides the transport collaborator and the retrying request executor used
by the auth pipeline.

Classes:
    :class:`Transport` -- protocol any HTTP collaborator satisfies.
    :class:`HttpxTransport` -- default transport backed by :class:`httpx.AsyncClient`.
    :class:`RequestExecutor` -- JSON requests with retry and exponential backoff.

Example::

    from rbauth.client import RequestExecutor
    from rbauth.models import RequestOptions

    executor = RequestExecutor(timeout=5.0)
    body = await executor.execute(url, RequestOptions(body="{}"), retries=3, backoff=0.3)
"""

from rbauth.client.executor import RETRYABLE_STATUS_CODES, RequestExecutor
from rbauth.client.transport import HttpxTransport, Transport

__all__ = ["HttpxTransport", "RETRYABLE_STATUS_CODES", "RequestExecutor", "Transport"]
