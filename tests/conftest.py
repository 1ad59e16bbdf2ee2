"""Shared test fixtures for all tests."""

import pytest


@pytest.fixture
def sample_station_id() -> str:
    """Sample NWS station ID for testing."""
    return "KPHL"


@pytest.fixture
def observation_url(sample_station_id: str) -> str:
    """Latest-observation URL for the sample station."""
    return f"https://api.weather.gov/stations/{sample_station_id}/observations/latest"
