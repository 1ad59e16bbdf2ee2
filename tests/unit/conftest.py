"""Unit test fixtures - mocks and sample data."""

from datetime import datetime, timezone

import pytest

from nws_exporter.config import ExporterConfig
from nws_exporter.metrics import MetricSet


def quantity(value: float | None, unit: str) -> dict:
    return {"unitCode": unit, "value": value, "qualityControl": "V"}


@pytest.fixture
def observation_timestamp() -> datetime:
    return datetime(2024, 1, 15, 11, 54, tzinfo=timezone.utc)


@pytest.fixture
def sample_observation_document() -> dict:
    """Trimmed GeoJSON feature as returned by api.weather.gov for KPHL."""
    return {
        "id": "https://api.weather.gov/stations/KPHL/observations/2024-01-15T11:54:00+00:00",
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [-75.23, 39.87]},
        "properties": {
            "@id": "https://api.weather.gov/stations/KPHL/observations/2024-01-15T11:54:00+00:00",
            "station": "https://api.weather.gov/stations/KPHL",
            "timestamp": "2024-01-15T11:54:00+00:00",
            "textDescription": "Cloudy",
            "temperature": quantity(3.9, "wmoUnit:degC"),
            "dewpoint": quantity(-2.2, "wmoUnit:degC"),
            "windDirection": quantity(250, "wmoUnit:degree_(angle)"),
            "windSpeed": quantity(18.36, "wmoUnit:km_h-1"),
            "windGust": quantity(None, "wmoUnit:km_h-1"),
            "barometricPressure": quantity(101320, "wmoUnit:Pa"),
            "seaLevelPressure": quantity(101330, "wmoUnit:Pa"),
            "visibility": quantity(16090, "wmoUnit:m"),
            "relativeHumidity": quantity(64.22, "wmoUnit:percent"),
        },
    }


@pytest.fixture
def exporter_config(sample_station_id: str) -> ExporterConfig:
    """Exporter configuration for testing."""
    return ExporterConfig(
        station=sample_station_id,
        address="api.weather.gov",
        timeout_seconds=5,
        backoff_seconds=1,
    )


@pytest.fixture
def metric_set() -> MetricSet:
    """Fresh gauges on their own registry."""
    return MetricSet()
