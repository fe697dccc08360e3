from __future__ import annotations

import itertools

import pytest

from pyqibla.bearing import KAABA, calculate_bearing, calculate_qibla, compute_relative_bearing, compute_rotation
from pyqibla.exceptions import CompassUnavailableError, ErrorKind
from pyqibla.models.bearing import Bearing, HeadingSample
from pyqibla.models.coordinate import Coordinate

LONDON = Coordinate(latitude=51.5074, longitude=-0.1278)


class TestCalculateBearing:
    def test_london_to_kaaba(self) -> None:
        bearing = calculate_bearing(KAABA, LONDON)
        assert bearing.degrees == pytest.approx(118.98, abs=0.1)

    def test_qibla_helper_uses_kaaba(self) -> None:
        assert calculate_qibla(LONDON) == calculate_bearing(KAABA, LONDON)

    @pytest.mark.parametrize(
        ("observer", "expected"),
        [
            (Coordinate(latitude=40.7128, longitude=-74.0060), 58.5),  # New York
            (Coordinate(latitude=-6.2088, longitude=106.8456), 295.1),  # Jakarta
        ],
    )
    def test_known_cities(self, observer: Coordinate, expected: float) -> None:
        assert calculate_qibla(observer).degrees == pytest.approx(expected, abs=0.2)

    def test_due_north_and_south(self) -> None:
        south = Coordinate(latitude=0.0, longitude=KAABA.longitude)
        north = Coordinate(latitude=60.0, longitude=KAABA.longitude)
        assert calculate_qibla(south).degrees == pytest.approx(0.0, abs=1e-9)
        assert calculate_qibla(north).degrees == pytest.approx(180.0, abs=1e-9)

    def test_range_for_assorted_points(self) -> None:
        latitudes = (-89.9, -45.0, 0.0, 21.4225, 45.0, 89.9)
        longitudes = (-180.0, -90.0, 0.0, 39.8262, 90.0, 180.0)
        points = [Coordinate(latitude=lat, longitude=lon) for lat, lon in itertools.product(latitudes, longitudes)]
        for reference, observer in itertools.product(points[::5], points):
            if reference.same_point(observer):
                continue
            bearing = calculate_bearing(reference, observer)
            assert bearing.degrees is not None
            assert 0.0 <= bearing.degrees < 360.0

    def test_same_point_is_undetermined(self) -> None:
        bearing = calculate_bearing(KAABA, KAABA)
        assert not bearing.is_determined
        assert bearing.degrees is None
        assert bearing.reason == ErrorKind.DEGENERATE_BEARING

    def test_deterministic(self) -> None:
        assert calculate_bearing(KAABA, LONDON).degrees == calculate_bearing(KAABA, LONDON).degrees


class TestRotation:
    def test_rotation_is_negated_heading(self) -> None:
        bearing = Bearing(degrees=118.98)
        assert compute_rotation(bearing, HeadingSample(degrees=90.0)) == -90.0

    def test_rotation_is_pure(self) -> None:
        bearing = Bearing(degrees=10.0)
        heading = HeadingSample(degrees=200.5)
        assert compute_rotation(bearing, heading) == compute_rotation(bearing, heading)

    def test_rotation_without_heading_raises(self) -> None:
        with pytest.raises(CompassUnavailableError):
            compute_rotation(Bearing(degrees=10.0), None)

    def test_relative_bearing_wraps(self) -> None:
        assert compute_relative_bearing(Bearing(degrees=10.0), HeadingSample(degrees=350.0)) == pytest.approx(20.0)
        assert compute_relative_bearing(Bearing(degrees=350.0), HeadingSample(degrees=10.0)) == pytest.approx(340.0)

    def test_relative_bearing_undetermined(self) -> None:
        assert compute_relative_bearing(Bearing.undetermined(), HeadingSample(degrees=10.0)) is None
