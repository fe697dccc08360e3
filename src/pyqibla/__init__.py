"""pyqibla - Async Qibla direction finding from device location and compass."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyqibla")
except PackageNotFoundError:
    __version__ = "0+local"
from pyqibla.bearing import KAABA, calculate_bearing, calculate_qibla, compute_relative_bearing, compute_rotation
from pyqibla.cache import CacheStore, MemoryCacheStore
from pyqibla.client import QiblaClient
from pyqibla.config import QiblaConfig
from pyqibla.exceptions import (
    CompassUnavailableError,
    EnrichmentFailedError,
    ErrorKind,
    LocationError,
    PermissionDeniedError,
    PositionTimeoutError,
    PositionUnavailableError,
    PositionUnknownError,
    QiblaConfigError,
    QiblaError,
    UnsupportedCapabilityError,
)
from pyqibla.models import (
    Bearing,
    Coordinate,
    HeadingSample,
    HeadingUpdate,
    LocationRecord,
    PlaceDetails,
    PositionReading,
    QiblaDirection,
)
from pyqibla.orientation import HeadingStream, OrientationSource
from pyqibla.positioning import (
    FixedPositionProvider,
    PermissionState,
    PositionErrorCode,
    PositionOptions,
    PositionProvider,
    position_error_from_code,
)
from pyqibla.store import LocationStore, ResolutionSource, ResolutionState, StateTransition

__all__ = [
    "__version__",
    "Bearing",
    "CacheStore",
    "CompassUnavailableError",
    "Coordinate",
    "EnrichmentFailedError",
    "ErrorKind",
    "FixedPositionProvider",
    "HeadingSample",
    "HeadingStream",
    "HeadingUpdate",
    "KAABA",
    "LocationError",
    "LocationRecord",
    "LocationStore",
    "MemoryCacheStore",
    "OrientationSource",
    "PermissionDeniedError",
    "PermissionState",
    "PlaceDetails",
    "PositionErrorCode",
    "PositionOptions",
    "PositionProvider",
    "PositionReading",
    "PositionTimeoutError",
    "PositionUnavailableError",
    "PositionUnknownError",
    "QiblaClient",
    "QiblaConfig",
    "QiblaConfigError",
    "QiblaDirection",
    "QiblaError",
    "ResolutionSource",
    "ResolutionState",
    "StateTransition",
    "UnsupportedCapabilityError",
    "calculate_bearing",
    "calculate_qibla",
    "compute_relative_bearing",
    "compute_rotation",
    "position_error_from_code",
]
