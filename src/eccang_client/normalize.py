"""
Per-operation reshaping of decoded ECCANG payloads.

The provider is inconsistent about cardinality: a list of one is sometimes
sent as a bare value, and a comma-joined string is sometimes sent as a list.
These helpers are pure and return new containers.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Callable

TRACKING_NUMBER_FIELD = "trackingnumberlist"
DETAIL_FIELD = "Detail"


def _join_part(part: Any) -> str:
    # null joins as an empty slot; booleans and numbers keep their JSON spelling.
    if part is None:
        return ""
    if isinstance(part, str):
        return part
    return json.dumps(part, ensure_ascii=False, separators=(",", ":"))


def flatten_tracking_numbers(
    items: list[Any], field: str = TRACKING_NUMBER_FIELD
) -> list[Any]:
    """Join list-valued tracking numbers into comma-separated strings."""
    flattened: list[Any] = []
    for item in items:
        if not isinstance(item, Mapping) or not isinstance(item.get(field), Mapping):
            flattened.append(item)
            continue
        numbers = {
            key: ",".join(_join_part(part) for part in value) if isinstance(value, list) else value
            for key, value in item[field].items()
        }
        flattened.append({**item, field: numbers})
    return flattened


def coerce_detail_list(items: list[Any], field: str = DETAIL_FIELD) -> list[Any]:
    """Make ``field`` a list whenever it is present so callers always iterate.

    A bare value is wrapped in a one-element list and ``null`` becomes an
    empty list. A missing field stays missing.
    """
    coerced: list[Any] = []
    for item in items:
        if not isinstance(item, Mapping) or field not in item or isinstance(item[field], list):
            coerced.append(item)
            continue
        value = item[field]
        coerced.append({**item, field: [] if value is None else [value]})
    return coerced


NORMALIZERS: dict[str, Callable[[list[Any]], list[Any]]] = {
    "getTrackNumber": flatten_tracking_numbers,
    "getCargoTrack": coerce_detail_list,
}


def normalize_payload(service: str, payload: Any) -> Any:
    """Apply the normalizer registered for ``service`` to a decoded payload."""
    normalizer = NORMALIZERS.get(service)
    if normalizer is None or not isinstance(payload, Mapping):
        return payload
    data = payload.get("data")
    if not isinstance(data, list):
        return payload
    return {**payload, "data": normalizer(data)}
