"""HTTP clients for upstream weather data."""

from .nws import FetchError, NWSClient

__all__ = ["FetchError", "NWSClient"]
