"""Positioning capability interface.

The device-side API is abstracted as a :class:`PositionProvider`: an
optional permission query followed by a single awaitable fix. Platform
bindings raise the classified errors from :mod:`pyqibla.exceptions`, or
use :func:`position_error_from_code` to translate W3C Geolocation error
codes.
"""

from __future__ import annotations

import enum
import logging
from enum import StrEnum
from typing import Protocol

from pydantic import Field

from pyqibla._constants import DEFAULT_MAX_AGE, DEFAULT_POSITION_TIMEOUT
from pyqibla.exceptions import (
    LocationError,
    PermissionDeniedError,
    PositionTimeoutError,
    PositionUnavailableError,
    PositionUnknownError,
)
from pyqibla.models._base import QiblaBaseModel
from pyqibla.models.coordinate import Coordinate, PositionReading

_logger = logging.getLogger(__name__)


class PermissionState(StrEnum):
    """Answer of a permission query (mirrors the browser Permissions API)."""

    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


class PositionErrorCode(enum.IntEnum):
    """W3C ``GeolocationPositionError`` codes."""

    UNKNOWN = -1
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3

    @classmethod
    def _missing_(cls, value: object) -> PositionErrorCode:
        return cls.UNKNOWN


_ERRORS_BY_CODE: dict[PositionErrorCode, type[LocationError]] = {
    PositionErrorCode.PERMISSION_DENIED: PermissionDeniedError,
    PositionErrorCode.POSITION_UNAVAILABLE: PositionUnavailableError,
    PositionErrorCode.TIMEOUT: PositionTimeoutError,
}


def position_error_from_code(code: int, message: str | None = None) -> LocationError:
    """Build the classified exception for a W3C position error code."""
    error_cls = _ERRORS_BY_CODE.get(PositionErrorCode(code), PositionUnknownError)
    return error_cls(message)


class PositionOptions(QiblaBaseModel):
    """Options handed to the positioning capability with every request."""

    enable_high_accuracy: bool = True
    timeout: float = Field(default=DEFAULT_POSITION_TIMEOUT, gt=0)
    maximum_age: float = Field(default=DEFAULT_MAX_AGE, ge=0)


class PositionProvider(Protocol):
    """Structural interface for a device positioning capability.

    ``get_current_position`` makes a single attempt; failures are raised
    as :class:`~pyqibla.exceptions.LocationError` subclasses.
    """

    async def request_permission(self) -> PermissionState:
        ...

    async def get_current_position(self, options: PositionOptions) -> PositionReading:
        ...


class FixedPositionProvider:
    """Provider for a manually configured location.

    Always grants permission and reports the same coordinate.
    """

    def __init__(self, latitude: float, longitude: float, *, accuracy: float | None = None) -> None:
        self._reading = PositionReading(
            coordinate=Coordinate(latitude=latitude, longitude=longitude),
            accuracy=accuracy,
        )

    async def request_permission(self) -> PermissionState:
        return PermissionState.GRANTED

    async def get_current_position(self, options: PositionOptions) -> PositionReading:
        _logger.debug("Fixed position requested (timeout=%.1fs)", options.timeout)
        return self._reading
