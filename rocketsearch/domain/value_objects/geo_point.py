"""GeoPoint value object — immutable (lat, lon) pair, plus great-circle distance."""

import math
from dataclasses import dataclass

# 1 degree of arc ≈ 60 nautical miles; 1 nautical mile ≈ 1.1515 statute miles
NAUTICAL_MILES_PER_DEGREE = 60
STATUTE_MILES_PER_NAUTICAL_MILE = 1.1515


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """True when latitude is in [-90, 90] and longitude in [-180, 180]."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def distance_miles(self, other: "GeoPoint") -> float:
        return great_circle_miles(self, other)


def great_circle_miles(origin: GeoPoint, target: GeoPoint) -> float:
    """Great-circle distance in statute miles (spherical law of cosines).

    Coordinates are not range-checked; out-of-range input gives a defined
    but meaningless number.
    """
    if origin == target:
        return 0.0

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    dlon = math.radians(origin.longitude - target.longitude)

    cos_angle = math.sin(lat1) * math.sin(lat2) + math.cos(lat1) * math.cos(lat2) * math.cos(dlon)
    # Float drift can push the argument just outside acos' domain
    cos_angle = max(-1.0, min(1.0, cos_angle))

    return (
        math.degrees(math.acos(cos_angle))
        * NAUTICAL_MILES_PER_DEGREE
        * STATUTE_MILES_PER_NAUTICAL_MILE
    )
