"""Prometheus gauges mirroring the latest NWS observation."""

import logging

from prometheus_client import CollectorRegistry, Gauge

from .schemas import CardinalDirection

logger = logging.getLogger(__name__)

NAMESPACE = "nws"

# Observation attribute -> (metric name, help text) for the unlabeled gauges.
_PLAIN_GAUGES: dict[str, tuple[str, str]] = {
    "relative_humidity": ("humidity", "humidity gauge percentage"),
    "temperature": ("temperature", "temperature in celsius"),
    "dewpoint": ("dewpoint", "dewpoint in celsius"),
    "wind_speed": ("wind_speed", "wind speed in kilometers per hour"),
    "barometric_pressure": ("barometric_pressure", "barometric pressure in pascals"),
    "sea_level_pressure": ("sealevel_pressure", "sealevel pressure in pascals"),
    "visibility": ("visibility", "visibility in meters"),
}


class MetricSet:
    """The exporter's gauges, registered once on their own registry.

    One instance lives for the whole process. The poller writes to it and the
    metrics server reads from it; prometheus_client locks each value, so a
    scrape may see some gauges from the new cycle and some from the last one.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self._gauges: dict[str, Gauge] = {
            field: Gauge(name, doc, namespace=NAMESPACE, registry=self.registry)
            for field, (name, doc) in _PLAIN_GAUGES.items()
        }
        self.wind_direction = Gauge(
            "wind_direction",
            "wind direction in degrees",
            ["Direction"],
            namespace=NAMESPACE,
            registry=self.registry,
        )
        self.time_since_update = Gauge(
            "time_since_update",
            "seconds since last nws update",
            namespace=NAMESPACE,
            registry=self.registry,
        )

    def set_measurement(self, field: str, value: float) -> None:
        """Set the gauge backing an Observation measurement.

        Wind direction goes to the child labeled with its compass bucket;
        children for other buckets keep whatever they last held.

        Raises:
            KeyError: If field is not a known measurement.
        """
        if field == "wind_direction":
            direction = CardinalDirection.from_degrees(value)
            self.wind_direction.labels(direction.value).set(value)
            return
        self._gauges[field].set(value)

    def set_time_since_update(self, seconds: float) -> None:
        self.time_since_update.set(seconds)
