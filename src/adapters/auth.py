"""httpx authentication for the Speech to Text service.

Three schemes, picked by `resolve_auth` in this order:
- a pre-issued IAM bearer token (`BearerTokenAuth`);
- an IAM API key exchanged for tokens on demand (`IAMTokenAuth`);
- basic auth (username/password).
"""

from __future__ import annotations

import base64
import logging
import threading
import time
from typing import Any, Callable, Generator

import httpx

from core.config import ServiceSettings
from core.errors import TransportError

logger = logging.getLogger(__name__)

IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
# Fixed client credentials expected by the IAM token endpoint.
IAM_CLIENT_ID = "bx"
IAM_CLIENT_SECRET = "bx"
# Refresh once this share of the token lifetime has elapsed.
IAM_REFRESH_RATIO = 0.8


def _basic_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class BearerTokenAuth(httpx.Auth):
    def __init__(self, token: str) -> None:
        self._token = token

    def set_token(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


class IAMTokenAuth(httpx.Auth):
    """Exchange an IAM API key for bearer tokens and cache them.

    The token request goes through the same httpx client (and transport) as
    the API call. A cached token is reused until `IAM_REFRESH_RATIO` of its
    lifetime has passed.
    """

    requires_response_body = True

    def __init__(
        self,
        apikey: str,
        *,
        iam_url: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._apikey = apikey
        self._iam_url = iam_url
        self._clock = clock
        self._lock = threading.Lock()
        self._access_token: str | None = None
        self._refresh_at = 0.0

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def _token_is_fresh(self) -> bool:
        return self._access_token is not None and self._clock() < self._refresh_at

    def build_token_request(self) -> httpx.Request:
        return httpx.Request(
            "POST",
            self._iam_url,
            data={
                "grant_type": IAM_GRANT_TYPE,
                "apikey": self._apikey,
                "response_type": "cloud_iam",
            },
            headers={
                "Accept": "application/json",
                "Authorization": _basic_header(IAM_CLIENT_ID, IAM_CLIENT_SECRET),
            },
        )

    def _store_token(self, response: httpx.Response) -> None:
        if response.status_code != 200:
            raise TransportError(f"IAM token request failed: HTTP {response.status_code}")
        try:
            data: dict[str, Any] = response.json()
        except ValueError as exc:
            raise TransportError("IAM token response is not JSON") from exc

        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            raise TransportError("IAM token response has no access_token")

        now = self._clock()
        expires_in = data.get("expires_in")
        expiration = data.get("expiration")
        if isinstance(expires_in, (int, float)) and expires_in > 0:
            lifetime = float(expires_in)
        elif isinstance(expiration, (int, float)) and expiration > now:
            lifetime = float(expiration) - now
        else:
            lifetime = 0.0

        self._access_token = token
        self._refresh_at = now + lifetime * IAM_REFRESH_RATIO
        logger.debug("IAM token refreshed (lifetime %.0fs)", lifetime)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        with self._lock:
            fresh = self._token_is_fresh()
        if not fresh:
            token_response = yield self.build_token_request()
            with self._lock:
                self._store_token(token_response)

        request.headers["Authorization"] = f"Bearer {self._access_token}"
        yield request


def resolve_auth(settings: ServiceSettings) -> httpx.Auth | None:
    mode = settings.auth_mode
    if mode == "bearer":
        return BearerTokenAuth(settings.iam_access_token or "")
    if mode == "iam":
        return IAMTokenAuth(settings.iam_apikey or "", iam_url=settings.iam_url)
    if mode == "basic":
        return httpx.BasicAuth(settings.username or "", settings.password or "")
    return None
