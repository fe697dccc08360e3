"""Bearing, heading and derived update models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from pyqibla._normalize import normalize_degrees, safe_float
from pyqibla.exceptions import ErrorKind
from pyqibla.models._base import QiblaBaseModel
from pyqibla.models.location import LocationRecord


class Bearing(QiblaBaseModel):
    """Compass direction from the observer to the reference point.

    ``degrees`` is ``None`` when the direction cannot be determined
    (observer at the reference point); ``reason`` then says why.
    """

    degrees: float | None = Field(default=None, ge=0.0, lt=360.0)
    reason: ErrorKind | None = None

    @classmethod
    def undetermined(cls, reason: ErrorKind = ErrorKind.DEGENERATE_BEARING) -> Bearing:
        return cls(degrees=None, reason=reason)

    @property
    def is_determined(self) -> bool:
        return self.degrees is not None


class HeadingSample(QiblaBaseModel):
    """Direction the device is facing, degrees clockwise from north."""

    degrees: float = Field(ge=0.0, lt=360.0)

    @field_validator("degrees", mode="before")
    @classmethod
    def _wrap(cls, value: Any) -> Any:
        parsed = safe_float(value)
        if parsed is None:
            return value
        return normalize_degrees(parsed)

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> HeadingSample | None:
        """Normalize a raw orientation event.

        ``webkitCompassHeading`` is already a compass heading and wins when
        present. Otherwise ``alpha`` counts counter-clockwise and is
        converted with ``360 - alpha``. Returns ``None`` when the event
        carries neither (sensor not calibrated).
        """
        compass = safe_float(event.get("webkitCompassHeading"))
        if compass is not None:
            return cls(degrees=compass)
        alpha = safe_float(event.get("alpha"))
        if alpha is not None:
            return cls(degrees=360.0 - alpha)
        return None


class HeadingUpdate(QiblaBaseModel):
    """What heading subscribers receive for every accepted sample."""

    heading: HeadingSample
    rotation: float
    bearing: Bearing | None = None
    relative_bearing: float | None = None


class QiblaDirection(QiblaBaseModel):
    """A resolved location paired with its bearing to the reference point."""

    location: LocationRecord
    bearing: Bearing
