"""Helpers for privacy-preserving debug logging.

Locations are personal data. Before anything location-shaped reaches a log
record, coordinates are coarsened to roughly a kilometre and street-level
fields are dropped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_COORDINATE_KEYS: frozenset[str] = frozenset({"latitude", "longitude", "lat", "lon", "lng"})

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "postcode",
        "display_name",
        "displayname",
        "road",
        "house_number",
        "street",
    }
)

_COORDINATE_DECIMALS = 2


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            lowered = key.lower()
            if lowered in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            elif lowered in _COORDINATE_KEYS and isinstance(v, (int, float)) and not isinstance(v, bool):
                redacted[key] = round(float(v), _COORDINATE_DECIMALS)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
