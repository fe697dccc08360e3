from __future__ import annotations

import pytest

from pyqibla.config import QiblaConfig
from pyqibla.exceptions import QiblaConfigError


def test_defaults() -> None:
    config = QiblaConfig()
    assert (config.reference_latitude, config.reference_longitude) == (21.4225, 39.8262)
    assert config.max_age == 1800.0
    assert config.position_timeout == 10.0
    assert config.enable_high_accuracy is True


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_MAX_AGE", "600")
    monkeypatch.setenv("QIBLA_LANGUAGE", "id")
    monkeypatch.setenv("QIBLA_ENABLE_HIGH_ACCURACY", "off")
    monkeypatch.setenv("QIBLA_GEOCODE_URL", "https://geocode.example/reverse")

    config = QiblaConfig.from_env()

    assert config.max_age == 600.0
    assert config.language == "id"
    assert config.enable_high_accuracy is False
    assert config.geocode_url == "https://geocode.example/reverse"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_MAX_AGE", "600")
    monkeypatch.setenv("QIBLA_ENABLE_HIGH_ACCURACY", "no")

    config = QiblaConfig.from_env(max_age=60.0, enable_high_accuracy=True)

    assert config.max_age == 60.0
    assert config.enable_high_accuracy is True


def test_from_env_rejects_bad_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_POSITION_TIMEOUT", "soon")
    with pytest.raises(QiblaConfigError, match="QIBLA_POSITION_TIMEOUT"):
        QiblaConfig.from_env()


@pytest.mark.parametrize("value", ["maybe", "", "2"])
def test_from_env_rejects_bad_bool(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("QIBLA_ENABLE_HIGH_ACCURACY", value)
    with pytest.raises(QiblaConfigError, match="QIBLA_ENABLE_HIGH_ACCURACY"):
        QiblaConfig.from_env()


def test_from_env_bad_bool_ignored_when_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QIBLA_ENABLE_HIGH_ACCURACY", "maybe")
    assert QiblaConfig.from_env(enable_high_accuracy=False).enable_high_accuracy is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"reference_latitude": 91.0},
        {"reference_longitude": -181.0},
        {"max_age": 0.0},
        {"position_timeout": -1.0},
        {"enrichment_retry_interval": -5.0},
        {"cache_key": ""},
    ],
)
def test_invalid_values(kwargs: dict) -> None:
    with pytest.raises(QiblaConfigError):
        QiblaConfig(**kwargs)
