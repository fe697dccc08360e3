from __future__ import annotations

import pytest

from _fakes import FakeClock, FakeGeocoder, FakePositionProvider


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider() -> FakePositionProvider:
    return FakePositionProvider()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()
