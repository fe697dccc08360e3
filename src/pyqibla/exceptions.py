"""Custom exception hierarchy for pyqibla."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification shared by location errors and undetermined results."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED_CAPABILITY = "unsupported_capability"
    ENRICHMENT_FAILED = "enrichment_failed"
    DEGENERATE_BEARING = "degenerate_bearing"
    UNKNOWN = "unknown"


class QiblaError(Exception):
    """Base exception for all pyqibla errors."""


class QiblaConfigError(QiblaError):
    """Invalid or missing configuration."""


class LocationError(QiblaError):
    """Location could not be resolved.

    Subclasses carry a default human-readable message so callers can show
    ``str(exc)`` directly.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_message: str = "An unknown error occurred while retrieving location."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class PermissionDeniedError(LocationError):
    """The user (or platform) refused access to a sensor."""

    kind = ErrorKind.PERMISSION_DENIED
    default_message = "Location access denied by user."


class PositionUnavailableError(LocationError):
    """The positioning capability could not produce a fix."""

    kind = ErrorKind.POSITION_UNAVAILABLE
    default_message = "Location information is unavailable."


class PositionTimeoutError(LocationError):
    """No fix arrived within the configured timeout."""

    kind = ErrorKind.TIMEOUT
    default_message = "Location request timed out."


class PositionUnknownError(LocationError):
    """The device reported an error code we do not recognise."""


class UnsupportedCapabilityError(LocationError):
    """Positioning or orientation API is absent on this device."""

    kind = ErrorKind.UNSUPPORTED_CAPABILITY
    default_message = "Geolocation is not supported by this device."


class CompassUnavailableError(UnsupportedCapabilityError):
    """No heading sample has arrived yet, so no rotation can be derived."""

    default_message = "Compass not available. Move the device in a figure-8 to calibrate."


class EnrichmentFailedError(QiblaError):
    """Reverse geocoding failed (network, non-200, invalid JSON).

    Never escapes :meth:`pyqibla.store.LocationStore.resolve`; the store
    records the ``"Unknown"`` sentinel instead.
    """

    kind = ErrorKind.ENRICHMENT_FAILED

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
