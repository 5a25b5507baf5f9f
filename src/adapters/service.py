"""Service core: send request descriptors and decode typed responses.

- `ServiceCore.request` hands a `RequestDescriptor` to the injected
  transport and returns a `DetailedResponse[T]`.
- Non-2xx answers raise `ServiceResponseError` with the envelope attached;
  status codes are not interpreted and nothing is retried.
- Decoding never discards status or headers: when the body cannot be
  decoded the envelope is returned with `result=None` and `decode_error`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from adapters.request_builder import RequestDescriptor
from core.errors import ServiceResponseError, TransportError
from core.interfaces.transport import HTTPTransport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass
class DetailedResponse(Generic[T]):
    """Response envelope: status, headers, decoded result and raw body."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    result: T | None = None
    raw: bytes = b""
    decode_error: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Raw body parsed as JSON, or `None` when it is empty or not JSON."""

        if not self.raw.strip():
            return None
        try:
            return json.loads(self.raw)
        except ValueError:
            return None


def _error_message(envelope: DetailedResponse[Any], reason: str) -> str:
    data = envelope.json()
    if isinstance(data, dict):
        for key in ("error", "message", "errorMessage", "code_description"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    text = envelope.raw.decode("utf-8", errors="replace").strip()
    return text[:500] if text else (reason or "request failed")


def decode_response(response: httpx.Response, result_type: type[T] | None) -> DetailedResponse[T]:
    """Build the envelope for a 2xx response.

    With `result_type=None` the body is ignored (an empty body is fine).
    """

    raw = response.read()
    envelope: DetailedResponse[T] = DetailedResponse(
        status_code=response.status_code,
        headers=dict(response.headers),
        raw=raw,
    )
    if result_type is None:
        return envelope

    if not raw.strip():
        envelope.decode_error = "empty response body"
    else:
        try:
            envelope.result = result_type.model_validate_json(raw)
        except PydanticValidationError as exc:
            envelope.decode_error = f"cannot decode {result_type.__name__}: {exc}"

    if envelope.decode_error:
        logger.warning(
            "Response %s not decoded: %s", response.status_code, envelope.decode_error
        )
    return envelope


class ServiceCore:
    """Sends requests for one service instance (base URL + transport)."""

    def __init__(self, transport: HTTPTransport, base_url: str) -> None:
        self._transport = transport
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    def request(
        self,
        descriptor: RequestDescriptor,
        result_type: type[T] | None = None,
    ) -> DetailedResponse[T]:
        client = self._transport if isinstance(self._transport, httpx.Client) else None
        request = descriptor.to_httpx(self._base_url, client)
        logger.debug("%s %s", request.method, request.url)

        try:
            response = self._transport.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"{descriptor.method} {descriptor.path} failed: {exc}") from exc

        logger.debug("%s %s -> %s", request.method, descriptor.path, response.status_code)

        if not 200 <= response.status_code < 300:
            envelope: DetailedResponse[T] = DetailedResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                raw=response.read(),
            )
            raise ServiceResponseError(
                _error_message(envelope, response.reason_phrase),
                response=envelope,
            )

        return decode_response(response, result_type)
