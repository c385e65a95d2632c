"""Request / response schemas for the combobox resources."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, field_validator

from rocketsearch.domain.value_objects.geo_point import GeoPoint
from rocketsearch.domain.value_objects.search import SearchRequest, SearchResult


class ComboboxParams(BaseModel):
    """Query parameters sent by the geo search combobox.

    ``lat`` / ``long`` arrive as strings; empty or non-numeric values are
    treated as absent rather than rejected.
    """

    query: str = ""
    lat: float | None = None
    long: float | None = None
    exclude: list[str] = Field(default_factory=list)

    @field_validator("query", mode="before")
    @classmethod
    def _none_query(cls, v):
        return "" if v is None else v

    @field_validator("lat", "long", mode="before")
    @classmethod
    def _nullable_number(cls, v):
        if v is None or v == "":
            return None
        try:
            number = float(v)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(number) else number

    @field_validator("exclude", mode="before")
    @classmethod
    def _drop_blank_ids(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [item for item in v if item and item.strip()]

    def reference_point(self) -> GeoPoint | None:
        if self.lat is None or self.long is None:
            return None
        return GeoPoint(latitude=self.lat, longitude=self.long)

    def to_request(self, limit: int) -> SearchRequest:
        return SearchRequest(
            reference_point=self.reference_point(),
            query_text=self.query,
            exclude_ids=frozenset(self.exclude),
            limit=limit,
        )


class GeoItem(BaseModel):
    id: str
    displayName: str
    distance: float | None

    @classmethod
    def from_result(cls, result: SearchResult) -> GeoItem:
        return cls(**result.to_dict())


class GeoItemList(BaseModel):
    items: list[GeoItem]


class ClosestStarport(BaseModel):
    item: GeoItem | None
