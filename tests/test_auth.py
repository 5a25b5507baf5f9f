"""Tests for adapters.auth and adapters.http_client: auth selection and IAM token flow."""

from __future__ import annotations

import base64
from urllib.parse import parse_qs

import httpx
import pytest

from adapters.auth import BearerTokenAuth, IAMTokenAuth, resolve_auth
from adapters.http_client import build_client
from core.config import ServiceSettings
from core.errors import TransportError

IAM_URL = "https://iam.example/identity/token"


class _Clock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now


def _iam_handler(seen: list[httpx.Request], *, token_status: int = 200):
    issued = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if str(request.url) == IAM_URL:
            if token_status != 200:
                return httpx.Response(token_status, json={"errorMessage": "bad key"})
            issued["count"] += 1
            return httpx.Response(
                200,
                json={"access_token": f"tok-{issued['count']}", "expires_in": 3600, "token_type": "Bearer"},
            )
        return httpx.Response(200, json={"models": []})

    return handler


def test_resolve_auth_by_mode() -> None:
    assert resolve_auth(ServiceSettings(_env_file=None)) is None
    assert isinstance(resolve_auth(ServiceSettings(_env_file=None, iam_access_token="t")), BearerTokenAuth)
    assert isinstance(resolve_auth(ServiceSettings(_env_file=None, iam_apikey="k")), IAMTokenAuth)
    assert isinstance(
        resolve_auth(ServiceSettings(_env_file=None, username="u", password="p")), httpx.BasicAuth
    )


def test_bearer_token_header() -> None:
    seen: list[httpx.Request] = []
    settings = ServiceSettings(_env_file=None, iam_access_token="static-token")
    with build_client(settings, transport=httpx.MockTransport(_iam_handler(seen))) as client:
        client.get("https://host/api/v1/models")
    assert seen[0].headers["Authorization"] == "Bearer static-token"


def test_iam_token_is_fetched_once_and_cached() -> None:
    seen: list[httpx.Request] = []
    clock = _Clock()
    auth = IAMTokenAuth("api-key-1", iam_url=IAM_URL, clock=clock)
    client = httpx.Client(auth=auth, transport=httpx.MockTransport(_iam_handler(seen)))

    client.get("https://host/api/v1/models")
    client.get("https://host/api/v1/models")

    token_requests = [r for r in seen if str(r.url) == IAM_URL]
    api_requests = [r for r in seen if str(r.url) != IAM_URL]
    assert len(token_requests) == 1
    assert [r.headers["Authorization"] for r in api_requests] == ["Bearer tok-1", "Bearer tok-1"]

    form = parse_qs(token_requests[0].content.decode())
    assert form == {
        "grant_type": ["urn:ibm:params:oauth:grant-type:apikey"],
        "apikey": ["api-key-1"],
        "response_type": ["cloud_iam"],
    }
    assert token_requests[0].headers["Authorization"] == "Basic " + base64.b64encode(b"bx:bx").decode()
    assert auth.access_token == "tok-1"


def test_iam_token_refreshes_after_most_of_its_lifetime() -> None:
    seen: list[httpx.Request] = []
    clock = _Clock()
    auth = IAMTokenAuth("k", iam_url=IAM_URL, clock=clock)
    client = httpx.Client(auth=auth, transport=httpx.MockTransport(_iam_handler(seen)))

    client.get("https://host/api/v1/models")
    clock.now += 3600 * 0.5
    client.get("https://host/api/v1/models")
    clock.now += 3600 * 0.4
    client.get("https://host/api/v1/models")

    assert len([r for r in seen if str(r.url) == IAM_URL]) == 2
    assert seen[-1].headers["Authorization"] == "Bearer tok-2"


def test_iam_token_failure_raises_transport_error() -> None:
    seen: list[httpx.Request] = []
    auth = IAMTokenAuth("bad", iam_url=IAM_URL)
    client = httpx.Client(auth=auth, transport=httpx.MockTransport(_iam_handler(seen, token_status=400)))

    with pytest.raises(TransportError, match="HTTP 400"):
        client.get("https://host/api/v1/models")
    assert all(str(r.url) == IAM_URL for r in seen)


def test_build_client_applies_timeout_and_extra_headers() -> None:
    settings = ServiceSettings(_env_file=None, http_timeout_seconds=5)
    client = build_client(settings, extra_headers={"X-Watson-Metadata": "customer_id=c1"})
    assert client.timeout.read == 5
    assert client.headers["X-Watson-Metadata"] == "customer_id=c1"
    assert client.headers["User-Agent"] == settings.user_agent
    client.close()
