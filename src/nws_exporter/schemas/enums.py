"""Enums for weather observation schemas."""

import math
from enum import Enum


class CardinalDirection(str, Enum):
    """Eight-point compass direction used to label wind direction gauges.

    Members are declared clockwise from north; each covers a 45 degree arc
    centered on its compass point.
    """

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @classmethod
    def from_degrees(cls, degrees: float) -> "CardinalDirection":
        """Map a heading in degrees to its compass bucket.

        Any finite heading is accepted and wrapped into [0, 360) first, so
        -90 maps to W and 450 to E. Boundaries round half up: 22.5 is NE.

        Raises:
            ValueError: If degrees is NaN or infinite.
        """
        if not math.isfinite(degrees):
            raise ValueError(f"wind direction must be finite, got {degrees!r}")
        normalized = degrees % 360
        members = list(cls)
        return members[math.floor(normalized / 45 + 0.5) % len(members)]
