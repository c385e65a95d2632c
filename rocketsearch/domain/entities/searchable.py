"""SearchableEntity — a read-only snapshot of a city or starport row."""

from dataclasses import dataclass

from rocketsearch.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class SearchableEntity:
    id: str
    name: str
    latitude: float
    longitude: float
    country: str | None = None

    @property
    def location(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    def field_value(self, field_name: str) -> str | None:
        """Return a text field by name (``name``, ``country``)."""
        return getattr(self, field_name)
