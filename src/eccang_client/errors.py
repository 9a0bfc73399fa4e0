"""
Error taxonomy for ECCANG calls.

Every failure raised by the client derives from ``EccangClientError``. A
business-level ``ask: "Failure"`` is not an error and never lands here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class EccangClientError(Exception):
    """Base error for ECCANG request failures."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class SerializationError(EccangClientError):
    """Raised when call parameters cannot be serialized to JSON."""


class NetworkError(EccangClientError):
    """Raised when the transport fails or returns a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class ProtocolError(EccangClientError):
    """Raised when the response carries no ``<response>`` element."""


class EmptyResponseError(EccangClientError):
    """Raised when the ``<response>`` element is empty after unwrapping."""


class ResponseParseError(EccangClientError):
    """Raised when the ``<response>`` payload is not valid JSON."""
