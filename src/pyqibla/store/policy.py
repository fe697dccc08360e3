"""Deterministic freshness, enrichment and transition policy.

Contains no I/O; the store feeds it records and clock readings.
"""

from __future__ import annotations

from datetime import datetime

from pyqibla.models.location import LocationRecord
from pyqibla.store.events import ResolutionState

_ALLOWED_TRANSITIONS: dict[ResolutionState, frozenset[ResolutionState]] = {
    ResolutionState.IDLE: frozenset({ResolutionState.AWAITING_PERMISSION, ResolutionState.RESOLVED}),
    ResolutionState.AWAITING_PERMISSION: frozenset({ResolutionState.RESOLVING, ResolutionState.FAILED}),
    ResolutionState.RESOLVING: frozenset({ResolutionState.RESOLVED, ResolutionState.FAILED}),
    # Terminal per call; a new call starts again from IDLE.
    ResolutionState.RESOLVED: frozenset({ResolutionState.IDLE}),
    ResolutionState.FAILED: frozenset({ResolutionState.IDLE}),
}


def can_transition(current: ResolutionState, target: ResolutionState) -> bool:
    return target in _ALLOWED_TRANSITIONS.get(current, frozenset())


def is_fresh(record: LocationRecord, now: datetime, max_age_seconds: float) -> bool:
    """A cached record is valid only while ``now - captured_at < max_age``."""
    return record.age_seconds(now) < max_age_seconds


def should_retry_enrichment(record: LocationRecord, now: datetime, retry_interval_seconds: float) -> bool:
    """Decide whether a cache hit should trigger another reverse-geocode.

    Policy:
    - Only records still carrying the ``"Unknown"`` sentinel are retried.
    - At most once per ``retry_interval_seconds`` since the last attempt.
    """
    if record.is_enriched:
        return False
    last = record.enrichment_attempted_at
    if last is None:
        return True
    return (now - last).total_seconds() >= retry_interval_seconds


def next_captured_at(previous: LocationRecord | None, now: datetime) -> datetime:
    """Capture time for a replacement record; never moves backwards."""
    if previous is None:
        return now
    return max(previous.captured_at, now)
