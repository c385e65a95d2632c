"""Combobox resource endpoints — nearest city / starport search."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from rocketsearch.application.use_cases.proximity_search import ProximitySearchUseCase
from rocketsearch.domain.errors import InvalidSearchRequestError
from rocketsearch.domain.value_objects.geo_point import GeoPoint
from rocketsearch.infrastructure.api.dependencies import (
    get_proximity_search_uc,
    get_result_limit,
)
from rocketsearch.infrastructure.api.schemas import (
    ClosestStarport,
    ComboboxParams,
    GeoItem,
    GeoItemList,
)

router = APIRouter(prefix="/resources", tags=["search"])


def combobox_params(
    query: str | None = Query(default=""),
    lat: str | None = Query(default=None),
    long: str | None = Query(default=None),
    exclude: list[str] = Query(default=[]),
) -> ComboboxParams:
    return ComboboxParams(query=query, lat=lat, long=long, exclude=exclude)


@router.get("/city-combobox", response_model=GeoItemList)
async def city_combobox(
    params: ComboboxParams = Depends(combobox_params),
    limit: int = Depends(get_result_limit),
    uc: ProximitySearchUseCase = Depends(get_proximity_search_uc),
):
    """Cities matching the query, nearest first when lat/long are given."""
    results = await uc.find_closest_cities(params.to_request(limit))
    return GeoItemList(items=[GeoItem.from_result(r) for r in results])


@router.get("/starport-combobox", response_model=GeoItemList)
async def starport_combobox(
    params: ComboboxParams = Depends(combobox_params),
    limit: int = Depends(get_result_limit),
    uc: ProximitySearchUseCase = Depends(get_proximity_search_uc),
):
    """Starports matching the query, nearest first when lat/long are given."""
    results = await uc.find_closest_starports(params.to_request(limit))
    return GeoItemList(items=[GeoItem.from_result(r) for r in results])


@router.get("/closest-starport", response_model=ClosestStarport)
async def closest_starport(
    params: ComboboxParams = Depends(combobox_params),
    uc: ProximitySearchUseCase = Depends(get_proximity_search_uc),
):
    """The single nearest starport to lat/long."""
    point: GeoPoint | None = params.reference_point()
    if point is None:
        raise InvalidSearchRequestError("lat and long are required")
    result = await uc.find_closest_starport(point)
    return ClosestStarport(item=GeoItem.from_result(result) if result else None)
