"""Geographic coordinate and device reading models."""

from __future__ import annotations

import math

from pydantic import AliasChoices, Field, field_validator

from pyqibla._constants import SAME_POINT_EPSILON
from pyqibla.models._base import QiblaBaseModel


class Coordinate(QiblaBaseModel):
    """A point on the globe in decimal degrees.

    Parameters
    ----------
    latitude : float
        Degrees north, in ``[-90, 90]``.
    longitude : float
        Degrees east, in ``[-180, 180]``.
    """

    latitude: float = Field(ge=-90.0, le=90.0, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(ge=-180.0, le=180.0, validation_alias=AliasChoices("longitude", "lng", "lon"))

    @field_validator("latitude", "longitude")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("coordinate components must be finite")
        return value

    def same_point(self, other: Coordinate) -> bool:
        """Whether *other* denotes the same point (within float noise)."""
        return (
            abs(self.latitude - other.latitude) < SAME_POINT_EPSILON
            and abs(self.longitude - other.longitude) < SAME_POINT_EPSILON
        )


class PositionReading(QiblaBaseModel):
    """One fix reported by the positioning capability.

    ``accuracy`` is the reported radius in metres, ``None`` when the
    device does not report it.
    """

    coordinate: Coordinate
    accuracy: float | None = Field(default=None, ge=0.0)
