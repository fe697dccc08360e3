"""Location record and reverse-geocoding models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from pyqibla._constants import UNKNOWN_PLACE
from pyqibla._normalize import first_meaningful, safe_str
from pyqibla.models._base import QiblaBaseModel, UtcDatetime
from pyqibla.models.coordinate import Coordinate, PositionReading

# Most specific first; BigDataCloud uses city/locality, Nominatim town/village/county.
_CITY_KEYS = ("city", "town", "village", "county", "locality")
_COUNTRY_KEYS = ("countryName", "country")
_STATE_KEYS = ("principalSubdivision", "state")
_POSTCODE_KEYS = ("postcode", "postCode")
_DISPLAY_NAME_KEYS = ("display_name", "displayName")


class PlaceDetails(QiblaBaseModel):
    """Place names for a coordinate, as reported by the reverse geocoder.

    Accepts both the flat BigDataCloud document and the Nominatim
    document (fields nested under ``address``). Empty strings count as
    absent; missing city/country resolve to ``"Unknown"``.
    """

    city: str = UNKNOWN_PLACE
    country: str = UNKNOWN_PLACE
    state: str | None = None
    postcode: str | None = None
    display_name: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _pick_fields(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        nested = values.get("address")
        if isinstance(nested, dict):
            merged.update(nested)

        picked: dict[str, Any] = {}
        for field_name, keys in (
            ("city", _CITY_KEYS),
            ("country", _COUNTRY_KEYS),
            ("state", _STATE_KEYS),
            ("postcode", _POSTCODE_KEYS),
            ("display_name", _DISPLAY_NAME_KEYS),
        ):
            value = safe_str(first_meaningful(merged, keys))
            if value is not None:
                picked[field_name] = value
        return picked

    @classmethod
    def unknown(cls) -> PlaceDetails:
        return cls()


class LocationRecord(QiblaBaseModel):
    """The observer's resolved location.

    Parameters
    ----------
    coordinate : Coordinate
        Where the observer is.
    accuracy : float or None
        Reported fix accuracy in metres.
    city, country : str
        Place names, ``"Unknown"`` when enrichment failed.
    state, postcode, display_name : str or None
        Optional place details.
    captured_at : datetime
        UTC time the coordinate was acquired.
    enrichment_attempted_at : datetime or None
        UTC time of the last reverse-geocoding attempt.
    """

    coordinate: Coordinate
    accuracy: float | None = None
    city: str = UNKNOWN_PLACE
    country: str = UNKNOWN_PLACE
    state: str | None = None
    postcode: str | None = None
    display_name: str | None = None
    captured_at: UtcDatetime
    enrichment_attempted_at: UtcDatetime | None = Field(default=None)

    @classmethod
    def from_reading(
        cls,
        reading: PositionReading,
        place: PlaceDetails,
        *,
        captured_at: datetime,
        enrichment_attempted_at: datetime | None = None,
    ) -> LocationRecord:
        return cls(
            coordinate=reading.coordinate,
            accuracy=reading.accuracy,
            captured_at=captured_at,
            enrichment_attempted_at=enrichment_attempted_at,
            **place.model_dump(),
        )

    def with_place(self, place: PlaceDetails, *, attempted_at: datetime) -> LocationRecord:
        """Copy with place fields replaced; coordinate and capture time kept."""
        return self.model_copy(update={**place.model_dump(), "enrichment_attempted_at": attempted_at})

    @property
    def is_enriched(self) -> bool:
        return self.city != UNKNOWN_PLACE and self.country != UNKNOWN_PLACE

    def age_seconds(self, now: datetime) -> float:
        return (now - self.captured_at).total_seconds()
