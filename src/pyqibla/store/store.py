"""Location acquisition, enrichment and caching.

The :class:`LocationStore` is the only component allowed to write the
observer's :class:`~pyqibla.models.LocationRecord`. Resolution is layered:
fresh cache entry, then a single device fix, then best-effort reverse
geocoding, then persistence.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError

from pyqibla._geocoder import ReverseGeocoder
from pyqibla._redact import redact_for_log
from pyqibla.cache import CacheStore, MemoryCacheStore
from pyqibla.config import QiblaConfig
from pyqibla.exceptions import (
    EnrichmentFailedError,
    LocationError,
    PermissionDeniedError,
    PositionTimeoutError,
    PositionUnknownError,
    QiblaError,
    UnsupportedCapabilityError,
)
from pyqibla.models._base import ensure_utc, utcnow
from pyqibla.models.coordinate import Coordinate, PositionReading
from pyqibla.models.location import LocationRecord, PlaceDetails
from pyqibla.positioning import PermissionState, PositionOptions, PositionProvider
from pyqibla.store.events import ResolutionSource, ResolutionState, StateTransition
from pyqibla.store.policy import can_transition, is_fresh, next_captured_at, should_retry_enrichment

_logger = logging.getLogger(__name__)

_PERMISSION_DENIED_MESSAGE = "Location permission was denied. Please enable location access in your device settings."


class LocationStore:
    """Resolves and caches the observer's location.

    Usage::

        store = LocationStore(provider, geocoder=geocoder, cache=MemoryCacheStore())
        record = await store.resolve()
        fresh = await store.resolve(force_refresh=True)

    Concurrent :meth:`resolve` calls share one in-flight resolution and
    receive the same outcome.
    """

    def __init__(
        self,
        position_provider: PositionProvider | None,
        *,
        geocoder: ReverseGeocoder | None = None,
        cache: CacheStore | None = None,
        config: QiblaConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
        on_state_change: Callable[[StateTransition], None] | None = None,
    ) -> None:
        self._provider = position_provider
        self._geocoder = geocoder
        self._cache: CacheStore = cache if cache is not None else MemoryCacheStore()
        self._config = config or QiblaConfig()
        self._clock = clock
        self._on_state_change = on_state_change
        self._state = ResolutionState.IDLE
        self._record: LocationRecord | None = None
        self._inflight: asyncio.Future[LocationRecord] | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def current(self) -> LocationRecord | None:
        """The last resolved record held in memory, if any."""
        return self._record

    @property
    def position_options(self) -> PositionOptions:
        return PositionOptions(
            enable_high_accuracy=self._config.enable_high_accuracy,
            timeout=self._config.position_timeout,
            maximum_age=self._config.max_age,
        )

    async def resolve(self, force_refresh: bool = False) -> LocationRecord:
        """Return the observer's location.

        Parameters
        ----------
        force_refresh : bool
            Skip the cache and query the device. Ignored when another
            resolution is already in flight; the caller joins it.

        Raises
        ------
        LocationError
            Positioning is unsupported, denied, unavailable or timed out.
            Enrichment failures never raise. Errors from the cache backend
            propagate unchanged after the state moves to ``FAILED``.
        """
        inflight = self._inflight
        if inflight is None or inflight.done():
            inflight = asyncio.ensure_future(self._resolve(force_refresh))
            inflight.add_done_callback(self._on_inflight_done)
            self._inflight = inflight
        else:
            _logger.debug("Joining in-flight location resolution")
        # Shield so one cancelled caller does not cancel the shared resolution.
        return await asyncio.shield(inflight)

    def clear(self) -> None:
        """Discard the cached and in-memory record. Safe to call repeatedly."""
        self._cache.remove(self._config.cache_key)
        self._record = None
        _logger.debug("Location cache cleared")

    # ------------------------------------------------------------------
    # Resolution pipeline
    # ------------------------------------------------------------------

    def _on_inflight_done(self, task: asyncio.Future[LocationRecord]) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # Awaiters receive the error through shield(); mark it retrieved
            # for the case where every awaiter was cancelled.
            task.exception()

    async def _resolve(self, force_refresh: bool) -> LocationRecord:
        # Every call runs a fresh instance of the state machine.
        self._state = ResolutionState.IDLE
        now = self._now()

        if not force_refresh:
            cached = self._load_cached()
            if cached is not None and is_fresh(cached, now, self._config.max_age):
                if should_retry_enrichment(cached, now, self._config.enrichment_retry_interval):
                    cached = await self._enrich_cached(cached)
                self._record = cached
                self._transition(ResolutionState.RESOLVED, source=ResolutionSource.CACHE)
                return cached
            if cached is not None:
                _logger.debug("Cached location expired (age=%.0fs)", cached.age_seconds(now))

        try:
            reading = await self._acquire()
        except LocationError as exc:
            self._transition(ResolutionState.FAILED, error=str(exc))
            raise
        except Exception as exc:
            self._transition(ResolutionState.FAILED, error=repr(exc))
            raise PositionUnknownError(f"Positioning failed: {exc}") from exc

        try:
            record = await self._build_record(reading)
            self._persist(record)
        except Exception as exc:
            self._transition(ResolutionState.FAILED, error=repr(exc))
            raise
        self._transition(ResolutionState.RESOLVED, source=ResolutionSource.DEVICE)
        _logger.debug("Resolved location: %s", redact_for_log(record))
        return record

    async def _acquire(self) -> PositionReading:
        """Permission gate followed by a single bounded fix attempt."""
        self._transition(ResolutionState.AWAITING_PERMISSION)
        provider = self._provider
        if provider is None:
            raise UnsupportedCapabilityError()

        permission = await provider.request_permission()
        if permission == PermissionState.DENIED:
            raise PermissionDeniedError(_PERMISSION_DENIED_MESSAGE)
        # PROMPT: the position request itself asks the user.

        self._transition(ResolutionState.RESOLVING)
        options = self.position_options
        try:
            return await asyncio.wait_for(provider.get_current_position(options), timeout=options.timeout)
        except TimeoutError as exc:
            raise PositionTimeoutError() from exc

    async def _build_record(self, reading: PositionReading) -> LocationRecord:
        attempted_at: datetime | None = None
        place: PlaceDetails | None = None
        if self._geocoder is not None:
            attempted_at = self._now()
            place = await self._reverse_geocode(self._geocoder, reading.coordinate)

        return LocationRecord.from_reading(
            reading,
            place or PlaceDetails.unknown(),
            captured_at=next_captured_at(self._record, self._now()),
            enrichment_attempted_at=attempted_at,
        )

    async def _enrich_cached(self, record: LocationRecord) -> LocationRecord:
        if self._geocoder is None:
            return record
        attempted_at = self._now()
        place = await self._reverse_geocode(self._geocoder, record.coordinate)
        if place is None:
            updated = record.model_copy(update={"enrichment_attempted_at": attempted_at})
        else:
            updated = record.with_place(place, attempted_at=attempted_at)
        self._persist(updated)
        return updated

    async def _reverse_geocode(self, geocoder: ReverseGeocoder, coordinate: Coordinate) -> PlaceDetails | None:
        """Best-effort enrichment; ``None`` means use the sentinel."""
        try:
            return await geocoder.reverse(coordinate)
        except EnrichmentFailedError as exc:
            _logger.warning("Reverse geocoding failed, place name left unknown: %s", exc)
        except Exception:
            _logger.warning("Unexpected reverse geocoding error, place name left unknown", exc_info=True)
        return None

    # ------------------------------------------------------------------
    # Cache slot
    # ------------------------------------------------------------------

    def _load_cached(self) -> LocationRecord | None:
        raw = self._cache.get(self._config.cache_key)
        if raw is None:
            return None
        try:
            return LocationRecord.model_validate_json(raw)
        except ValidationError:
            _logger.warning("Discarding unreadable cached location", exc_info=True)
            self._cache.remove(self._config.cache_key)
            return None

    def _persist(self, record: LocationRecord) -> None:
        self._record = record
        self._cache.set(self._config.cache_key, record.model_dump_json())

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _now(self) -> datetime:
        return ensure_utc(self._clock())

    def _transition(
        self,
        target: ResolutionState,
        *,
        source: ResolutionSource | None = None,
        error: str | None = None,
    ) -> None:
        previous = self._state
        if not can_transition(previous, target):
            raise QiblaError(f"Illegal resolution transition {previous} -> {target}")
        self._state = target
        _logger.debug("Resolution state %s -> %s", previous, target)

        if self._on_state_change is None:
            return
        try:
            self._on_state_change(
                StateTransition(previous=previous, current=target, at=self._now(), source=source, error=error)
            )
        except Exception:
            _logger.debug("on_state_change callback failed", exc_info=True)
