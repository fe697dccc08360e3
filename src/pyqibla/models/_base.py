"""Base model for pyqibla data types.

Every model is frozen: a value obtained from a reading is never changed in
place. Updated copies are produced with ``model_copy(update=...)``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Annotated type that always yields a tz-aware UTC datetime."""


def utcnow() -> datetime:
    return datetime.now(UTC)


class QiblaBaseModel(BaseModel):
    """Base for pyqibla models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
