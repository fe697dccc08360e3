"""Reverse-geocoding over HTTP."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from pyqibla._constants import USER_AGENT
from pyqibla._redact import redact_for_log
from pyqibla.config import QiblaConfig
from pyqibla.exceptions import EnrichmentFailedError
from pyqibla.models.coordinate import Coordinate
from pyqibla.models.location import PlaceDetails

_logger = logging.getLogger(__name__)


class ReverseGeocoder(Protocol):
    """Structural geocoder interface used by the location store.

    Lets tests pass doubles while keeping the production implementation
    (:class:`BigDataCloudGeocoder`) concrete.
    """

    async def reverse(self, coordinate: Coordinate) -> PlaceDetails:
        ...


class BigDataCloudGeocoder:
    """Client for BigDataCloud-style ``reverse-geocode-client`` endpoints.

    Any failure (network, non-200, invalid JSON) is raised as
    :class:`EnrichmentFailedError`.
    """

    def __init__(self, config: QiblaConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.geocode_timeout)

    def _build_params(self, coordinate: Coordinate) -> dict[str, str]:
        return {
            "latitude": repr(coordinate.latitude),
            "longitude": repr(coordinate.longitude),
            "localityLanguage": self._config.language,
        }

    async def reverse(self, coordinate: Coordinate) -> PlaceDetails:
        url = self._config.geocode_url
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s for %s", url, redact_for_log(coordinate))

        try:
            async with self._http.get(
                url,
                params=self._build_params(coordinate),
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                raw = await resp.read()
                if resp.status != 200:
                    raise EnrichmentFailedError(
                        f"HTTP {resp.status} from {url}: {raw[:200].decode('utf-8', errors='replace')}",
                        status_code=resp.status,
                        url=url,
                    )
        except EnrichmentFailedError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise EnrichmentFailedError(f"Request to {url} failed: {exc!r}", url=url) from exc

        try:
            body: Any = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise EnrichmentFailedError(f"Invalid JSON from {url}: {raw[:200]!r}", url=url) from exc

        if not isinstance(body, dict):
            raise EnrichmentFailedError(f"Unexpected payload type from {url}: {type(body).__name__}", url=url)

        try:
            place = PlaceDetails.model_validate(body)
        except ValidationError as exc:
            raise EnrichmentFailedError(f"Unexpected payload from {url}: {exc}", url=url) from exc
        _logger.debug("Reverse geocode result: %s", redact_for_log(place))
        return place
