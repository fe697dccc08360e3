"""High-level async client tying location, bearing and compass together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import aiohttp

from pyqibla._geocoder import BigDataCloudGeocoder, ReverseGeocoder
from pyqibla.bearing import calculate_bearing
from pyqibla.cache import CacheStore
from pyqibla.config import QiblaConfig
from pyqibla.exceptions import QiblaError
from pyqibla.models._base import utcnow
from pyqibla.models.bearing import Bearing, QiblaDirection
from pyqibla.models.coordinate import Coordinate
from pyqibla.models.location import LocationRecord
from pyqibla.orientation import HeadingStream, OrientationSource
from pyqibla.positioning import PositionProvider
from pyqibla.store.events import StateTransition
from pyqibla.store.store import LocationStore

_logger = logging.getLogger(__name__)


class QiblaClient:
    """Async facade for Qibla direction finding.

    Usage::

        async with QiblaClient(config, position_provider=provider) as client:
            direction = await client.get_qibla()
            await client.activate_compass()
            client.headings.subscribe(render)
    """

    def __init__(
        self,
        config: QiblaConfig | None = None,
        *,
        position_provider: PositionProvider | None = None,
        orientation_source: OrientationSource | None = None,
        geocoder: ReverseGeocoder | None = None,
        cache: CacheStore | None = None,
        session: aiohttp.ClientSession | None = None,
        clock: Callable[[], datetime] = utcnow,
        on_state_change: Callable[[StateTransition], None] | None = None,
    ) -> None:
        self._config = config or QiblaConfig()
        self._position_provider = position_provider
        self._geocoder = geocoder
        self._cache = cache
        self._clock = clock
        self._on_state_change = on_state_change
        self._external_session = session is not None
        self._http_session = session
        self._store: LocationStore | None = None
        self.headings = HeadingStream(orientation_source)
        self.reference = Coordinate(
            latitude=self._config.reference_latitude,
            longitude=self._config.reference_longitude,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> QiblaClient:
        geocoder = self._geocoder
        if geocoder is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            geocoder = BigDataCloudGeocoder(self._config, self._http_session)
        self._store = LocationStore(
            self._position_provider,
            geocoder=geocoder,
            cache=self._cache,
            config=self._config,
            clock=self._clock,
            on_state_change=self._on_state_change,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.headings.deactivate()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._store = None

    def _require_store(self) -> LocationStore:
        if self._store is None:
            raise QiblaError("Client not initialized. Use 'async with QiblaClient(...) as client:'")
        return self._store

    @property
    def store(self) -> LocationStore:
        return self._require_store()

    # ------------------------------------------------------------------
    # Location and bearing
    # ------------------------------------------------------------------

    async def locate(self, force_refresh: bool = False) -> LocationRecord:
        """Resolve the observer's location and refresh the compass bearing."""
        record = await self._require_store().resolve(force_refresh)
        self.headings.bearing = self.bearing_for(record.coordinate)
        return record

    def bearing_for(self, observer: Coordinate) -> Bearing:
        return calculate_bearing(self.reference, observer)

    async def get_qibla(self, force_refresh: bool = False) -> QiblaDirection:
        """Resolve the location and return it with the Qibla bearing."""
        record = await self.locate(force_refresh)
        bearing = self.bearing_for(record.coordinate)
        if not bearing.is_determined:
            _logger.info("Qibla direction undetermined at the reference point")
        return QiblaDirection(location=record, bearing=bearing)

    def clear(self) -> None:
        self._require_store().clear()
        self.headings.bearing = None

    # ------------------------------------------------------------------
    # Compass
    # ------------------------------------------------------------------

    async def activate_compass(self) -> None:
        await self.headings.activate()

    def rotation(self) -> float:
        """Rotation for the compass rose; raises ``CompassUnavailableError``."""
        return self.headings.rotation()
