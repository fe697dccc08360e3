"""Data models for pyqibla."""

from pyqibla.models._base import QiblaBaseModel, UtcDatetime, ensure_utc, utcnow
from pyqibla.models.bearing import Bearing, HeadingSample, HeadingUpdate, QiblaDirection
from pyqibla.models.coordinate import Coordinate, PositionReading
from pyqibla.models.location import LocationRecord, PlaceDetails

__all__ = [
    "Bearing",
    "Coordinate",
    "HeadingSample",
    "HeadingUpdate",
    "LocationRecord",
    "PlaceDetails",
    "PositionReading",
    "QiblaBaseModel",
    "QiblaDirection",
    "UtcDatetime",
    "ensure_utc",
    "utcnow",
]
