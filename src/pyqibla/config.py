"""Client configuration for pyqibla."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from pyqibla._constants import (
    CACHE_KEY,
    DEFAULT_ENRICHMENT_RETRY_INTERVAL,
    DEFAULT_GEOCODE_TIMEOUT,
    DEFAULT_MAX_AGE,
    DEFAULT_POSITION_TIMEOUT,
    GEOCODE_URL,
    KAABA_LATITUDE,
    KAABA_LONGITUDE,
)
from pyqibla.exceptions import QiblaConfigError


def _env_bool(env_key: str, value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    raise QiblaConfigError(f"{env_key} must be a boolean, got {value!r}")


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise QiblaConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class QiblaConfig:
    """Client configuration.

    Parameters
    ----------
    reference_latitude : float
        Latitude of the bearing target. Defaults to the Kaaba.
    reference_longitude : float
        Longitude of the bearing target. Defaults to the Kaaba.
    max_age : float
        Seconds a resolved location stays valid in the cache. Also passed
        to the positioning capability as ``maximum_age``.
    position_timeout : float
        Seconds to wait for a device fix before failing with a timeout.
    enable_high_accuracy : bool
        Ask the positioning capability for its most accurate fix.
    geocode_url : str
        Reverse-geocoding endpoint (BigDataCloud-style query parameters).
    geocode_timeout : float
        Total HTTP timeout for a reverse-geocoding request.
    language : str
        Locality language requested from the geocoder.
    enrichment_retry_interval : float
        Minimum seconds between enrichment retries for a cached record
        whose place name is still ``"Unknown"``.
    cache_key : str
        Key under which the serialized record is stored.
    """

    reference_latitude: float = KAABA_LATITUDE
    reference_longitude: float = KAABA_LONGITUDE
    max_age: float = DEFAULT_MAX_AGE
    position_timeout: float = DEFAULT_POSITION_TIMEOUT
    enable_high_accuracy: bool = True
    geocode_url: str = GEOCODE_URL
    geocode_timeout: float = DEFAULT_GEOCODE_TIMEOUT
    language: str = "en"
    enrichment_retry_interval: float = DEFAULT_ENRICHMENT_RETRY_INTERVAL
    cache_key: str = CACHE_KEY

    def __post_init__(self) -> None:
        if not -90.0 <= self.reference_latitude <= 90.0:
            raise QiblaConfigError(f"reference_latitude out of range: {self.reference_latitude}")
        if not -180.0 <= self.reference_longitude <= 180.0:
            raise QiblaConfigError(f"reference_longitude out of range: {self.reference_longitude}")
        for name in ("max_age", "position_timeout", "geocode_timeout"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise QiblaConfigError(f"{name} must be a positive number, got {value}")
        if self.enrichment_retry_interval < 0:
            raise QiblaConfigError("enrichment_retry_interval must not be negative")
        if not self.cache_key:
            raise QiblaConfigError("cache_key must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> QiblaConfig:
        """Create configuration from ``QIBLA_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "QIBLA_REFERENCE_LATITUDE": "reference_latitude",
            "QIBLA_REFERENCE_LONGITUDE": "reference_longitude",
            "QIBLA_MAX_AGE": "max_age",
            "QIBLA_POSITION_TIMEOUT": "position_timeout",
            "QIBLA_GEOCODE_TIMEOUT": "geocode_timeout",
            "QIBLA_ENRICHMENT_RETRY_INTERVAL": "enrichment_retry_interval",
        }
        _ENV_STR_MAP = {
            "QIBLA_GEOCODE_URL": "geocode_url",
            "QIBLA_LANGUAGE": "language",
            "QIBLA_CACHE_KEY": "cache_key",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "enable_high_accuracy" not in overrides:
            config_kwargs["enable_high_accuracy"] = _env_bool(
                "QIBLA_ENABLE_HIGH_ACCURACY", env.get("QIBLA_ENABLE_HIGH_ACCURACY"), True
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
