"""Request mapper: endpoint + options -> `RequestDescriptor`.

Steps, all local (no I/O):
1. validate the options object (present, right type, required fields set);
2. build the path by interleaving fixed segments with path parameters;
3. emit query parameters in declaration order, skipping absent ones;
4. set `Accept`, body `Content-Type` and header fields, then merge caller
   headers last (caller wins on collisions, case-insensitively);
5. build the body: nothing, raw payload, JSON object of the set fields, or
   multipart form data.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from adapters.endpoints import BodyMode, Endpoint
from core.domain.options import RequestOptions, Wire, iter_wire_fields, required_fields
from core.errors import BodySerializationError, ValidationError

logger = logging.getLogger(__name__)

JSON_MIME = "application/json"
_STREAM_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything the transport needs, before the base URL is applied.

    `path` keeps path parameters verbatim for inspection; `encoded_path` is
    what goes on the wire, each parameter percent-encoded as one segment.
    `content` is the raw payload exactly as the caller supplied it (bytes or
    a binary stream) or the encoded JSON body; `json_body` keeps the JSON
    object for inspection; `files` holds multipart parts.
    """

    method: str
    path: str
    params: tuple[tuple[str, str], ...] = ()
    headers: dict[str, str] = field(default_factory=dict)
    content: Any = None
    json_body: dict[str, Any] | None = None
    files: dict[str, tuple[str, Any, str]] | None = None
    encoded_path: str | None = None

    def url(self, base_url: str) -> str:
        path = self.encoded_path if self.encoded_path is not None else self.path
        return f"{base_url.rstrip('/')}/{path}"

    def query(self) -> dict[str, str]:
        return dict(self.params)

    def to_httpx(self, base_url: str, client: httpx.Client | None = None) -> httpx.Request:
        """Build the httpx request; through `client` its default headers and
        timeout are applied too."""

        kwargs: dict[str, Any] = {}
        if self.files is not None:
            kwargs["files"] = self.files
        elif self.content is not None:
            kwargs["content"] = _as_request_content(self.content)
        factory = client.build_request if client is not None else httpx.Request
        return factory(
            self.method,
            self.url(base_url),
            params=list(self.params),
            headers=self.headers,
            **kwargs,
        )


def _as_request_content(content: Any) -> Any:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    if hasattr(content, "read"):
        return _iter_stream(content)
    return content


def _iter_stream(stream: Any) -> Iterator[bytes]:
    while True:
        chunk = stream.read(_STREAM_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


def format_value(value: Any) -> str:
    """Render a value the way the service expects it in a query or header."""

    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(v) for v in value)
    return str(value)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict)):
        return len(value) == 0
    return False


def validate_options(endpoint: Endpoint, options: RequestOptions | None) -> RequestOptions:
    """Return usable options or raise `ValidationError` (no I/O)."""

    if options is None:
        if endpoint.options_optional:
            return endpoint.options_type()
        raise ValidationError(f"{endpoint.name}: options cannot be None")

    if not isinstance(options, endpoint.options_type):
        raise ValidationError(
            f"{endpoint.name}: expected {endpoint.options_type.__name__}, "
            f"got {type(options).__name__}"
        )

    for name in required_fields(endpoint.options_type):
        if _is_empty(getattr(options, name)):
            raise ValidationError(f"{endpoint.name}: '{name}' is required", field=name)
    return options


def build_path(segments: tuple[str, ...], path_params: list[str], *, encode: bool = False) -> str:
    """Interleave segments and parameters: seg0/param0/seg1/param1/...

    With `encode=True` every parameter is percent-encoded as a single path
    segment, so `/`, `?` and `#` inside a name stay part of it.
    """

    if encode:
        path_params = [quote(p, safe="") for p in path_params]
    parts: list[str] = []
    for index, segment in enumerate(segments):
        parts.append(segment)
        if index < len(path_params):
            parts.append(path_params[index])
    parts.extend(path_params[len(segments):])
    return "/".join(parts)


def _set_header(headers: dict[str, str], name: str, value: str) -> None:
    for existing in [k for k in headers if k.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value


def _json_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def _corpus_filename(options: RequestOptions, data: Any) -> str:
    explicit = getattr(options, "corpus_filename", None)
    if explicit:
        return explicit
    name = getattr(data, "name", None)
    if isinstance(name, str) and name:
        return os.path.basename(name)
    return str(getattr(options, "corpus_name", None) or "corpus.txt")


def build_request(endpoint: Endpoint, options: RequestOptions | None = None) -> RequestDescriptor:
    """Map an options object onto the wire request of `endpoint`.

    Raises:
        ValidationError: options missing, of the wrong type, or lacking a
            required field.
        BodySerializationError: the JSON or multipart body cannot be built.
    """

    options = validate_options(endpoint, options)

    path_params: list[str] = []
    params: list[tuple[str, str]] = []
    headers: dict[str, str] = {"Accept": JSON_MIME}
    body: dict[str, Any] = {}
    payload: Any = None
    form_value: Any = None

    for field_name, spec in iter_wire_fields(endpoint.options_type):
        value = getattr(options, field_name)
        if value is None:
            continue
        if spec.location is Wire.PATH:
            path_params.append(format_value(value))
        elif spec.location is Wire.QUERY:
            params.append((spec.name, format_value(value)))
        elif spec.location is Wire.HEADER:
            _set_header(headers, spec.name, format_value(value))
        elif spec.location is Wire.BODY:
            body[spec.name] = _json_value(value)
        elif spec.location is Wire.PAYLOAD:
            payload = value
        elif spec.location is Wire.FORM:
            form_value = value

    content: Any = None
    json_body: dict[str, Any] | None = None
    files: dict[str, tuple[str, Any, str]] | None = None

    if endpoint.body is BodyMode.JSON:
        _set_header(headers, "Content-Type", JSON_MIME)
        try:
            content = json.dumps(body, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise BodySerializationError(f"{endpoint.name}: cannot encode JSON body: {exc}") from exc
        json_body = body
    elif endpoint.body is BodyMode.PAYLOAD:
        if payload is not None and not (
            isinstance(payload, (bytes, bytearray, memoryview)) or hasattr(payload, "read")
        ):
            raise BodySerializationError(
                f"{endpoint.name}: payload must be bytes or a binary stream, "
                f"got {type(payload).__name__}"
            )
        content = payload
    elif endpoint.body is BodyMode.MULTIPART:
        data = form_value.encode("utf-8") if isinstance(form_value, str) else form_value
        if isinstance(data, bytearray):
            data = bytes(data)
        if data is not None and not (isinstance(data, bytes) or hasattr(data, "read")):
            raise BodySerializationError(
                f"{endpoint.name}: form data must be bytes, str or a file object"
            )
        files = {"corpus_file": (_corpus_filename(options, form_value), data, "text/plain")}

    for name, value in (options.headers or {}).items():
        _set_header(headers, name, value)

    path = build_path(endpoint.segments, path_params)
    logger.debug("Built %s %s (%d query params)", endpoint.method, path, len(params))
    return RequestDescriptor(
        method=endpoint.method,
        path=path,
        params=tuple(params),
        headers=headers,
        content=content,
        json_body=json_body,
        files=files,
        encoded_path=build_path(endpoint.segments, path_params, encode=True),
    )
