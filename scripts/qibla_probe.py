#!/usr/bin/env python3
"""Resolve a location and print its Qibla direction.

Uses a fixed position (``--lat``/``--lon``) in place of a device sensor,
runs the normal resolution pipeline (including live reverse geocoding
unless ``--no-geocode`` is given) and prints the result.

Usage::

    python scripts/qibla_probe.py --lat 51.5074 --lon -0.1278
    python scripts/qibla_probe.py --lat -6.2088 --lon 106.8456 --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

_src = Path(__file__).resolve().parent.parent / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyqibla import (  # noqa: E402
    FixedPositionProvider,
    LocationError,
    QiblaClient,
    QiblaConfig,
    QiblaDirection,
)
from pyqibla._geocoder import ReverseGeocoder  # noqa: E402
from pyqibla.models import Coordinate, PlaceDetails  # noqa: E402


class _OfflineGeocoder:
    async def reverse(self, coordinate: Coordinate) -> PlaceDetails:
        return PlaceDetails.unknown()


def _format(direction: QiblaDirection) -> str:
    loc = direction.location
    bearing = direction.bearing
    lines = [
        f"  location : {loc.city}, {loc.country}",
        f"  coords   : {loc.coordinate.latitude:.4f}, {loc.coordinate.longitude:.4f}",
    ]
    if bearing.degrees is None:
        lines.append("  qibla    : undetermined (you are at the Kaaba)")
    else:
        lines.append(f"  qibla    : {bearing.degrees:.1f}°")
    return "\n".join(lines)


async def main() -> int:
    parser = argparse.ArgumentParser(description="Print the Qibla bearing for a coordinate.")
    parser.add_argument("--lat", type=float, required=True, help="Observer latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Observer longitude in degrees")
    parser.add_argument("--accuracy", type=float, default=None, help="Reported accuracy in metres")
    parser.add_argument("--no-geocode", action="store_true", help="Skip the reverse-geocoding request")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = QiblaConfig.from_env()
    try:
        provider = FixedPositionProvider(args.lat, args.lon, accuracy=args.accuracy)
    except ValueError as exc:
        print(f"Invalid coordinate: {exc}", file=sys.stderr)
        return 2

    geocoder: ReverseGeocoder | None = _OfflineGeocoder() if args.no_geocode else None
    async with QiblaClient(config, position_provider=provider, geocoder=geocoder) as client:
        try:
            direction = await client.get_qibla()
        except LocationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    if args.json_mode:
        print(json.dumps(direction.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        print(_format(direction))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
