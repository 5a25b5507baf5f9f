"""Shared fixtures: isolated environment and a recording httpx transport."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.http_client import build_client
from adapters.speech_to_text import SpeechToTextV1
from core.config import ServiceSettings

BASE_URL = "https://stt.example.test/speech-to-text/api"


class RecordingTransport:
    """`httpx.MockTransport` wrapper that records requests and replays responses.

    Each queued response is a `(status, body)` pair; `body` may be a dict
    (sent as JSON), bytes or `None`. When the queue is empty, `200 {}` is
    returned.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []
        self._queue: list[tuple[int, Any, dict[str, str]]] = []
        self.transport = httpx.MockTransport(self._handle)

    def queue(self, status: int, body: Any = None, headers: dict[str, str] | None = None) -> None:
        self._queue.append((status, body, headers or {}))

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(request.read())
        self.requests.append(request)
        status, body, headers = self._queue.pop(0) if self._queue else (200, {}, {})
        if isinstance(body, (dict, list)):
            content = json.dumps(body).encode("utf-8")
            headers = {"Content-Type": "application/json", **headers}
        else:
            content = body or b""
        return httpx.Response(status, content=content, headers=headers)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for key in (
        "URL",
        "USERNAME",
        "PASSWORD",
        "IAM_APIKEY",
        "IAM_ACCESS_TOKEN",
        "IAM_URL",
        "HTTP_TIMEOUT_SECONDS",
        "USER_AGENT",
        "LEARNING_OPT_OUT",
    ):
        monkeypatch.delenv(f"SPEECH_TO_TEXT_{key}", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(_env_file=None, url=BASE_URL, username="user", password="secret")


@pytest.fixture
def make_client(
    recorder: RecordingTransport, settings: ServiceSettings
) -> Callable[..., SpeechToTextV1]:
    """Build a `SpeechToTextV1` whose HTTP traffic goes to `recorder`."""

    def _make(**overrides: Any) -> SpeechToTextV1:
        conf = settings.model_copy(update=overrides) if overrides else settings
        client = build_client(conf, transport=recorder.transport)
        return SpeechToTextV1(conf, client=client)

    return _make


@pytest.fixture
def stt(make_client: Callable[..., SpeechToTextV1]) -> SpeechToTextV1:
    return make_client()
