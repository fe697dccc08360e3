"""Normalization helpers.

Centralizes defensive parsing of sensor events and geocoder payloads.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def is_meaningful(value: Any) -> bool:
    """Return True if the value carries information (not None/empty)."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if value == {}:
        return False
    return bool(value != [])


def first_meaningful(data: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the first meaningful value among *keys*, in order."""
    for key in keys:
        value = data.get(key)
        if is_meaningful(value):
            return value
    return None


def normalize_degrees(value: float) -> float:
    """Wrap an angle into ``[0, 360)``."""
    wrapped = value % 360.0
    # -1e-17 % 360 rounds up to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped
