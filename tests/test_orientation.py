from __future__ import annotations

from dataclasses import dataclass

import pytest

from pyqibla.exceptions import CompassUnavailableError, PermissionDeniedError, UnsupportedCapabilityError
from pyqibla.models.bearing import Bearing, HeadingSample, HeadingUpdate
from pyqibla.orientation import HeadingStream
from pyqibla.positioning import PermissionState


@dataclass
class _Source:
    permission: PermissionState = PermissionState.GRANTED
    requests: int = 0

    async def request_permission(self) -> PermissionState:
        self.requests += 1
        return self.permission


async def _active_stream() -> HeadingStream:
    stream = HeadingStream(_Source())
    await stream.activate()
    return stream


@pytest.mark.asyncio
async def test_activate_without_source_is_unsupported() -> None:
    with pytest.raises(UnsupportedCapabilityError):
        await HeadingStream().activate()


@pytest.mark.asyncio
async def test_activate_denied() -> None:
    stream = HeadingStream(_Source(permission=PermissionState.DENIED))
    with pytest.raises(PermissionDeniedError):
        await stream.activate()
    assert not stream.is_active


@pytest.mark.asyncio
async def test_activate_only_asks_once() -> None:
    source = _Source()
    stream = HeadingStream(source)
    await stream.activate()
    await stream.activate()
    assert source.requests == 1


@pytest.mark.asyncio
async def test_samples_before_activation_are_dropped() -> None:
    stream = HeadingStream(_Source())
    assert stream.feed({"alpha": 90}) is None
    assert stream.latest is None


@pytest.mark.asyncio
async def test_subscribers_receive_rotation_and_relative_bearing() -> None:
    stream = await _active_stream()
    stream.bearing = Bearing(degrees=118.98)
    received: list[HeadingUpdate] = []
    stream.subscribe(received.append)

    stream.feed({"webkitCompassHeading": 90})
    stream.feed({"alpha": 270})

    assert [u.heading for u in received] == [HeadingSample(degrees=90.0)] * 2
    assert received[0].rotation == -90.0
    assert received[0].relative_bearing == pytest.approx(28.98)
    assert received[0].bearing == Bearing(degrees=118.98)


@pytest.mark.asyncio
async def test_update_without_bearing() -> None:
    stream = await _active_stream()
    update = stream.feed(HeadingSample(degrees=10.0))
    assert update is not None
    assert update.bearing is None
    assert update.relative_bearing is None
    assert update.rotation == -10.0


@pytest.mark.asyncio
async def test_uncalibrated_event_keeps_previous_sample() -> None:
    stream = await _active_stream()
    stream.feed({"alpha": 300})
    assert stream.feed({"alpha": None}) is None
    assert stream.latest == HeadingSample(degrees=60.0)


@pytest.mark.asyncio
async def test_unsubscribe_and_failing_subscriber() -> None:
    stream = await _active_stream()
    received: list[HeadingUpdate] = []

    def _boom(_update: HeadingUpdate) -> None:
        raise RuntimeError("render failed")

    stream.subscribe(_boom)
    unsubscribe = stream.subscribe(received.append)
    stream.feed({"alpha": 1})
    unsubscribe()
    unsubscribe()
    stream.feed({"alpha": 2})

    assert len(received) == 1


@pytest.mark.asyncio
async def test_rotation_requires_sample() -> None:
    stream = await _active_stream()
    with pytest.raises(CompassUnavailableError):
        stream.rotation()
    stream.feed({"webkitCompassHeading": 45})
    assert stream.rotation() == -45.0


@pytest.mark.asyncio
async def test_deactivate_forgets_latest() -> None:
    stream = await _active_stream()
    stream.feed({"alpha": 10})
    stream.deactivate()
    assert stream.latest is None
    assert not stream.is_active
