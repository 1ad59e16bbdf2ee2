"""Observation schema for the NWS latest-observation endpoint."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

# (attribute, name reported when the measurement is missing), in publish order.
MEASUREMENT_FIELDS: tuple[tuple[str, str], ...] = (
    ("relative_humidity", "RelativeHumidity"),
    ("temperature", "Temperature"),
    ("dewpoint", "Dewpoint"),
    ("wind_direction", "WindDirection"),
    ("wind_speed", "WindSpeed"),
    ("barometric_pressure", "BarometricPressure"),
    ("sea_level_pressure", "SeaLevelPressure"),
    ("visibility", "Visibility"),
)


class QuantitativeValue(BaseModel):
    """A single NWS measurement, e.g. ``{"unitCode": "wmoUnit:degC", "value": 21.5}``.

    The API sends ``"value": null`` when the sensor reported nothing.
    """

    model_config = ConfigDict(populate_by_name=True)

    value: Annotated[float, Field(allow_inf_nan=False)] | None = None
    unit_code: str | None = Field(default=None, alias="unitCode")
    quality_control: str | None = Field(default=None, alias="qualityControl")


class Observation(BaseModel):
    """Latest observation for one station.

    Every measurement is independently optional; the upstream feed omits
    sensors a station does not have.
    """

    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime

    relative_humidity: QuantitativeValue | None = Field(default=None, alias="relativeHumidity")
    temperature: QuantitativeValue | None = None
    dewpoint: QuantitativeValue | None = None
    wind_direction: QuantitativeValue | None = Field(default=None, alias="windDirection")
    wind_speed: QuantitativeValue | None = Field(default=None, alias="windSpeed")
    barometric_pressure: QuantitativeValue | None = Field(
        default=None, alias="barometricPressure"
    )
    sea_level_pressure: QuantitativeValue | None = Field(default=None, alias="seaLevelPressure")
    visibility: QuantitativeValue | None = None

    @field_validator("timestamp")
    @classmethod
    def validate_timezone(cls, v: datetime) -> datetime:
        """Ensure timestamp is timezone-aware, normalized to UTC."""
        if v.tzinfo is None:
            raise ValueError("timestamp must include a timezone")
        return v.astimezone(timezone.utc)

    def measurement(self, field: str) -> float | None:
        """Return the numeric value of a measurement, or None if absent.

        A measurement is present only when both the wrapper object and its
        inner value are present.
        """
        qv: QuantitativeValue | None = getattr(self, field)
        if qv is None:
            return None
        return qv.value


class ObservationResponse(BaseModel):
    """GeoJSON feature returned by ``/stations/{id}/observations/latest``."""

    properties: Observation
