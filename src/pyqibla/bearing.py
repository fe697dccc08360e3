"""Great-circle bearing and compass rotation.

Everything here is pure: same inputs, same outputs, no I/O.
"""

from __future__ import annotations

import math

from pyqibla._constants import KAABA_LATITUDE, KAABA_LONGITUDE
from pyqibla._normalize import normalize_degrees
from pyqibla.exceptions import CompassUnavailableError
from pyqibla.models.bearing import Bearing, HeadingSample
from pyqibla.models.coordinate import Coordinate

KAABA = Coordinate(latitude=KAABA_LATITUDE, longitude=KAABA_LONGITUDE)


def calculate_bearing(reference: Coordinate, observer: Coordinate) -> Bearing:
    """Initial great-circle bearing from *observer* towards *reference*.

    Uses ``atan2(sin Δλ, cos φo · tan φr − sin φo · cos Δλ)`` with
    ``Δλ = λr − λo``. Returns :meth:`Bearing.undetermined` when both
    points coincide, since every direction is then equally valid.
    """
    if reference.same_point(observer):
        return Bearing.undetermined()

    phi_ref = math.radians(reference.latitude)
    phi_obs = math.radians(observer.latitude)
    delta_lambda = math.radians(reference.longitude - observer.longitude)

    psi = math.atan2(
        math.sin(delta_lambda),
        math.cos(phi_obs) * math.tan(phi_ref) - math.sin(phi_obs) * math.cos(delta_lambda),
    )
    degrees = math.degrees(psi)
    if not math.isfinite(degrees):
        return Bearing.undetermined()
    return Bearing(degrees=normalize_degrees(degrees + 360.0))


def calculate_qibla(observer: Coordinate, reference: Coordinate = KAABA) -> Bearing:
    """Bearing from *observer* to the Kaaba (or another *reference*)."""
    return calculate_bearing(reference, observer)


def _require_heading(heading: HeadingSample | None) -> HeadingSample:
    if heading is None:
        raise CompassUnavailableError()
    return heading


def compute_rotation(bearing: Bearing | None, heading: HeadingSample | None) -> float:
    """Rotation to apply to a compass rose so it matches the device heading.

    The rose is turned by ``-heading``; the bearing is drawn on the rose
    and shown separately, so it does not enter the rotation.
    """
    return -_require_heading(heading).degrees


def compute_relative_bearing(bearing: Bearing, heading: HeadingSample | None) -> float | None:
    """Where the target lies relative to the direction the device faces.

    ``0`` means straight ahead, ``90`` to the right. ``None`` when the
    bearing is undetermined.
    """
    sample = _require_heading(heading)
    if bearing.degrees is None:
        return None
    return normalize_degrees(bearing.degrees - sample.degrees)
