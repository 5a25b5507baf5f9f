"""Transport contract used by the service core.

`httpx.Client` satisfies it as-is; tests inject spies or clients built on
`httpx.MockTransport`. Authentication, TLS, timeouts and cancellation all
belong to the transport.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class HTTPTransport(Protocol):
    """Minimal contract: send one request, return one response.

    - Synchronous: each operation is a single request/response exchange.
    - Raises `httpx.HTTPError` subclasses on network failures.
    """

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send `request` and return the (fully read) response."""

        ...
