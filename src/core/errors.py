"""Exceptions raised by the Speech to Text client.

Taxonomy:
- local failures (`ValidationError`, `BodySerializationError`) are raised
  before any I/O happens;
- remote failures (`ServiceResponseError`, `TransportError`) wrap whatever the
  transport or the service returned, without interpreting status codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.service import DetailedResponse


class SpeechToTextError(Exception):
    """Base exception for the Speech to Text client."""


class ConfigurationError(SpeechToTextError):
    """Raised when the service settings are inconsistent."""


class ValidationError(SpeechToTextError):
    """An options object is missing, has the wrong type, or lacks a required field."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class BodySerializationError(SpeechToTextError):
    """The request body (JSON or multipart) could not be built."""


class TransportError(SpeechToTextError):
    """The transport failed before a response was received."""


class ServiceResponseError(SpeechToTextError):
    """The service answered with a non-2xx status.

    The full envelope is kept in `response` so callers can inspect headers,
    the raw body, and the status code themselves.
    """

    def __init__(self, message: str, *, response: "DetailedResponse") -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def message(self) -> str:
        return str(self.args[0])

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.args[0]}"
