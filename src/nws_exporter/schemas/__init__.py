"""NWS observation schemas.

Pydantic models for decoding the NWS API observation document.
"""

from .enums import CardinalDirection
from .observation import MEASUREMENT_FIELDS, Observation, ObservationResponse, QuantitativeValue

__all__ = [
    "CardinalDirection",
    "MEASUREMENT_FIELDS",
    "Observation",
    "ObservationResponse",
    "QuantitativeValue",
]
