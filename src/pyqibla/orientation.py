"""Device orientation: permission gate and heading subscription point."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from pyqibla.bearing import compute_relative_bearing, compute_rotation
from pyqibla.exceptions import PermissionDeniedError, UnsupportedCapabilityError
from pyqibla.models.bearing import Bearing, HeadingSample, HeadingUpdate
from pyqibla.positioning import PermissionState

_logger = logging.getLogger(__name__)

HeadingCallback = Callable[[HeadingUpdate], None]


class OrientationSource(Protocol):
    """Platform orientation API.

    Platforms without an explicit prompt simply return ``GRANTED``.
    """

    async def request_permission(self) -> PermissionState:
        ...


class HeadingStream:
    """Fan-out of normalized heading samples.

    Platform glue calls :meth:`feed` with each raw orientation event;
    subscribers receive a :class:`HeadingUpdate` with the recomputed
    rotation. Feeding is synchronous and never suspends.
    """

    def __init__(self, source: OrientationSource | None = None) -> None:
        self._source = source
        self._active = False
        self._latest: HeadingSample | None = None
        self._subscribers: list[HeadingCallback] = []
        self.bearing: Bearing | None = None

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def latest(self) -> HeadingSample | None:
        return self._latest

    async def activate(self) -> None:
        """Run the platform permission gate.

        Raises
        ------
        UnsupportedCapabilityError
            No orientation source is available.
        PermissionDeniedError
            The user refused sensor access.
        """
        if self._active:
            return
        if self._source is None:
            raise UnsupportedCapabilityError("Device orientation is not supported on this device.")
        permission = await self._source.request_permission()
        if permission == PermissionState.DENIED:
            raise PermissionDeniedError("Orientation permission not granted.")
        self._active = True
        _logger.debug("Compass activated (permission=%s)", permission)

    def deactivate(self) -> None:
        self._active = False
        self._latest = None

    def subscribe(self, callback: HeadingCallback) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def feed(self, event: Mapping[str, Any] | HeadingSample) -> HeadingUpdate | None:
        """Accept one orientation event and notify subscribers.

        Returns the delivered update, or ``None`` when the event was
        dropped (stream inactive, or no usable heading field).
        """
        if not self._active:
            _logger.debug("Heading sample dropped: compass not activated")
            return None

        sample = event if isinstance(event, HeadingSample) else HeadingSample.from_event(event)
        if sample is None:
            _logger.debug("Heading sample dropped: sensor not calibrated")
            return None

        self._latest = sample
        update = HeadingUpdate(
            heading=sample,
            rotation=compute_rotation(self.bearing, sample),
            bearing=self.bearing,
            relative_bearing=(compute_relative_bearing(self.bearing, sample) if self.bearing is not None else None),
        )
        for callback in list(self._subscribers):
            try:
                callback(update)
            except Exception:
                _logger.debug("Heading subscriber failed", exc_info=True)
        return update

    def rotation(self) -> float:
        """Rotation for the latest sample; raises if none has arrived."""
        return compute_rotation(self.bearing, self._latest)
