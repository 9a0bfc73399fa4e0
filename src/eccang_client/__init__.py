"""
Async client for the ECCANG logistics web service.

Requests and responses are JSON documents carried inside a fixed SOAP
envelope; this package builds and unwraps that envelope, smooths over the
provider's shape quirks, and emits redacted audit records per call.
"""

from .audit import ApiLogEntry, ApiLogError, ApiLogger, LoggingApiLogger
from .client import EccangClient
from .config import Settings
from .envelope import build_envelope, decode_xml_entities, extract_response
from .errors import (
    EccangClientError,
    EmptyResponseError,
    NetworkError,
    ProtocolError,
    ResponseParseError,
    SerializationError,
)
from .models import EccangError, EccangResult
from .normalize import coerce_detail_list, flatten_tracking_numbers, normalize_payload
from .redaction import MASK, SENSITIVE_KEYS, redact_sensitive

__all__ = [
    # Client
    "EccangClient",
    "Settings",
    "EccangResult",
    "EccangError",
    # Audit
    "ApiLogEntry",
    "ApiLogError",
    "ApiLogger",
    "LoggingApiLogger",
    # Codec
    "build_envelope",
    "decode_xml_entities",
    "extract_response",
    # Normalizers
    "coerce_detail_list",
    "flatten_tracking_numbers",
    "normalize_payload",
    # Redaction
    "MASK",
    "SENSITIVE_KEYS",
    "redact_sensitive",
    # Errors
    "EccangClientError",
    "EmptyResponseError",
    "NetworkError",
    "ProtocolError",
    "ResponseParseError",
    "SerializationError",
]
