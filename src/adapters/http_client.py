"""httpx client factory.

Why a factory:
- Standardizes timeouts, default headers and authentication for every call.
- Eases testing: pass `transport=httpx.MockTransport(...)` and no socket is
  ever opened.
"""

from __future__ import annotations

import httpx

from adapters.auth import resolve_auth
from core.config import ServiceSettings


def build_client(
    settings: ServiceSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` with safe defaults.

    The returned client satisfies `core.interfaces.HTTPTransport` (it has
    `send(request) -> response`), so it can be handed to `ServiceCore`.
    """

    settings = settings or ServiceSettings()
    headers = settings.default_headers()
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        auth=resolve_auth(settings),
        transport=transport,
    )
