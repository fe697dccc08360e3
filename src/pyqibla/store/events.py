"""Resolution state machine states and transition events."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyqibla.models._base import UtcDatetime, utcnow


class ResolutionState(StrEnum):
    IDLE = "idle"
    AWAITING_PERMISSION = "awaiting_permission"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


class ResolutionSource(StrEnum):
    CACHE = "cache"
    DEVICE = "device"


class StateTransition(BaseModel):
    """One step of a resolution, as delivered to ``on_state_change``."""

    model_config = ConfigDict(frozen=True)

    previous: ResolutionState
    current: ResolutionState
    at: UtcDatetime = Field(default_factory=utcnow)
    source: ResolutionSource | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.current in (ResolutionState.RESOLVED, ResolutionState.FAILED)

