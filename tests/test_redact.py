from __future__ import annotations

from datetime import UTC, datetime

from pyqibla._redact import redact_for_log
from pyqibla.models.coordinate import Coordinate
from pyqibla.models.location import LocationRecord


def test_redact_for_log_coarsens_coordinates() -> None:
    payload = {
        "latitude": 51.507412,
        "lon": -0.127812,
        "postcode": "SW1A 1AA",
        "display_name": "10 Downing Street, London",
        "nested": {"lat": 1.23456, "road": "Whitehall"},
    }

    redacted = redact_for_log(payload)
    assert redacted["latitude"] == 51.51
    assert redacted["lon"] == -0.13
    assert redacted["postcode"] == "<redacted>"
    assert redacted["display_name"] == "<redacted>"
    assert redacted["nested"] == {"lat": 1.23, "road": "<redacted>"}


def test_redact_for_log_accepts_models() -> None:
    record = LocationRecord(
        coordinate=Coordinate(latitude=51.507412, longitude=-0.127812),
        city="London",
        postcode="SW1A",
        captured_at=datetime(2026, 1, 1, tzinfo=UTC),
    )
    redacted = redact_for_log(record)
    assert redacted["coordinate"] == {"latitude": 51.51, "longitude": -0.13}
    assert redacted["city"] == "London"
    assert redacted["postcode"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
