"""Key-value persistence for the serialized location record."""

from __future__ import annotations

from typing import Protocol


class CacheStore(Protocol):
    """One-entry session storage (``sessionStorage``-like).

    Values are the JSON text of a :class:`~pyqibla.models.LocationRecord`.
    """

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryCacheStore:
    """Process-lifetime cache; contents vanish with the session."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
