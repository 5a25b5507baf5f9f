"""Core interfaces (Protocol contracts implemented by adapters)."""

from core.interfaces.transport import HTTPTransport

__all__ = ["HTTPTransport"]
