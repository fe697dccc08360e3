"""Location resolution state: store, policy and transition events."""

from pyqibla.store.events import ResolutionSource, ResolutionState, StateTransition
from pyqibla.store.store import LocationStore

__all__ = ["LocationStore", "ResolutionSource", "ResolutionState", "StateTransition"]
