from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pyqibla.models.coordinate import Coordinate
from pyqibla.models.location import LocationRecord
from pyqibla.store.events import ResolutionState
from pyqibla.store.policy import can_transition, is_fresh, next_captured_at, should_retry_enrichment


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _record(city: str = "Unknown", attempted_at: datetime | None = None) -> LocationRecord:
    return LocationRecord(
        coordinate=Coordinate(latitude=1.0, longitude=2.0),
        city=city,
        country="Somewhere" if city != "Unknown" else "Unknown",
        captured_at=_dt(),
        enrichment_attempted_at=attempted_at,
    )


def test_allowed_transitions() -> None:
    assert can_transition(ResolutionState.IDLE, ResolutionState.AWAITING_PERMISSION)
    assert can_transition(ResolutionState.IDLE, ResolutionState.RESOLVED)
    assert can_transition(ResolutionState.AWAITING_PERMISSION, ResolutionState.FAILED)
    assert can_transition(ResolutionState.RESOLVING, ResolutionState.FAILED)
    assert not can_transition(ResolutionState.IDLE, ResolutionState.RESOLVING)
    assert not can_transition(ResolutionState.AWAITING_PERMISSION, ResolutionState.RESOLVED)
    assert not can_transition(ResolutionState.RESOLVED, ResolutionState.RESOLVING)


def test_freshness_boundary_is_exclusive() -> None:
    record = _record()
    assert is_fresh(record, _dt() + timedelta(seconds=1799), 1800.0)
    assert not is_fresh(record, _dt() + timedelta(seconds=1800), 1800.0)


def test_enrichment_retry_only_for_sentinel() -> None:
    now = _dt() + timedelta(hours=1)
    assert should_retry_enrichment(_record(), now, 300.0)
    assert not should_retry_enrichment(_record(city="Mecca"), now, 300.0)
    assert not should_retry_enrichment(_record(attempted_at=now - timedelta(seconds=10)), now, 300.0)
    assert should_retry_enrichment(_record(attempted_at=now - timedelta(seconds=300)), now, 300.0)


def test_captured_at_is_monotonic() -> None:
    previous = _record()
    assert next_captured_at(None, _dt()) == _dt()
    assert next_captured_at(previous, _dt() - timedelta(minutes=1)) == previous.captured_at
    assert next_captured_at(previous, _dt() + timedelta(minutes=1)) == _dt() + timedelta(minutes=1)
