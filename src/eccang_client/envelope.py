"""
SOAP envelope codec for the ECCANG web service.

The provider exposes a single ``callService`` SOAP operation. Requests carry
the JSON parameters in a CDATA section next to the credentials and the
service name; responses carry a JSON document inside a ``<response>``
element, optionally CDATA-wrapped and optionally entity-encoded.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import BaseModel

from .errors import EmptyResponseError, ProtocolError, ResponseParseError, SerializationError

XML_PREFIX = (
    '<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/" '
    'xmlns:ns1="http://www.example.org/Ec/">\n'
    "  <SOAP-ENV:Body>\n"
    "    <ns1:callService>"
)
XML_SUFFIX = "    </ns1:callService>\n  </SOAP-ENV:Body>\n</SOAP-ENV:Envelope>"

CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"

_RESPONSE_RE = re.compile(r"<response>(.*?)</response>", re.IGNORECASE | re.DOTALL)

# &amp; must stay last: "&amp;lt;" decodes to the literal text "&lt;".
_XML_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&amp;", "&"),
)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_unset=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_params(params: Any) -> str:
    """Serialize call parameters to compact JSON; strings pass through verbatim."""
    if isinstance(params, str):
        return params
    if params is None:
        params = {}
    try:
        return json.dumps(
            params,
            default=_json_default,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"params_serialization_failed: {exc}") from exc


def build_envelope(params: Any, service: str, *, app_token: str, app_key: str) -> str:
    """Build the outbound SOAP envelope for ``service``.

    Credentials and the service name are interpolated without escaping, and
    the JSON payload is embedded verbatim inside CDATA.
    """
    if not service:
        raise ValueError("service name must not be empty")

    payload = serialize_params(params)
    return "\n".join(
        [
            XML_PREFIX,
            f"      <paramsJson>{CDATA_OPEN}{payload}{CDATA_CLOSE}</paramsJson>",
            f"      <appToken>{app_token}</appToken>",
            f"      <appKey>{app_key}</appKey>",
            f"      <service>{service}</service>",
            XML_SUFFIX,
        ]
    )


def decode_xml_entities(value: str) -> str:
    for entity, replacement in _XML_ENTITIES:
        value = value.replace(entity, replacement)
    return value


def extract_response(xml: str) -> Any:
    """Extract and decode the JSON document embedded in a SOAP response."""
    match = _RESPONSE_RE.search(xml or "")
    if match is None:
        raise ProtocolError("missing response element")

    payload = match.group(1).strip()
    if payload.startswith(CDATA_OPEN):
        payload = payload[len(CDATA_OPEN) : -len(CDATA_CLOSE)]

    payload = decode_xml_entities(payload.strip()).strip()
    if not payload:
        raise EmptyResponseError("Received empty response body.")

    try:
        return json.loads(payload)
    except ValueError as exc:
        raise ResponseParseError(f"Failed to parse ECCANG response JSON: {exc}") from exc
