"""NWS exporter - Prometheus metrics for the latest NWS station observation.

Polls ``api.weather.gov`` for a single station on a fixed interval and
publishes temperature, humidity, wind, pressure and visibility as gauges:

    from nws_exporter import ExporterConfig, MetricSet, ObservationPoller
"""

__version__ = "0.1.0"

from .config import ExporterConfig, get_settings
from .metrics import MetricSet
from .poller import ObservationPoller
from .schemas import CardinalDirection, Observation

__all__ = [
    "CardinalDirection",
    "ExporterConfig",
    "MetricSet",
    "Observation",
    "ObservationPoller",
    "get_settings",
]
