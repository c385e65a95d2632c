"""Tests for ProximitySearchUseCase with in-memory fakes."""

from __future__ import annotations

import pytest

from rocketsearch.application.use_cases.proximity_search import ProximitySearchUseCase
from rocketsearch.domain.entities.searchable import SearchableEntity
from rocketsearch.domain.errors import InvalidSearchRequestError, StorageUnavailableError
from rocketsearch.domain.value_objects.geo_point import GeoPoint
from rocketsearch.domain.value_objects.search import SearchRequest

# ─── City search ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_cities_ranked_by_distance(repo, near_slc):
    """Both cities match "L"; SLC is closer to the reference point."""
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(
        SearchRequest(reference_point=near_slc, query_text="L")
    )
    assert [r.display_name for r in results] == ["Salt Lake City, US", "London, UK"]
    assert 80 < results[0].distance < 95
    assert 4800 < results[1].distance < 4950


@pytest.mark.asyncio
async def test_excluded_city_never_returned(repo, near_london):
    """London is the best match near London but is excluded."""
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(
        SearchRequest(reference_point=near_london, query_text="L", exclude_ids={"456"})
    )
    assert [r.id for r in results] == ["123"]


@pytest.mark.asyncio
async def test_no_match_returns_empty_list(repo, near_slc):
    uc = ProximitySearchUseCase(repo)
    assert await uc.find_closest_cities(
        SearchRequest(reference_point=near_slc, query_text="NO_MATCH")
    ) == []


@pytest.mark.asyncio
async def test_limit_one_returns_closer(repo, near_london):
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(
        SearchRequest(reference_point=near_london, query_text="L", limit=1)
    )
    assert len(results) == 1
    assert results[0].id == "456"


@pytest.mark.asyncio
async def test_without_reference_point_has_no_distances(repo):
    """Text-only search keeps the storage order and filtering behaviour."""
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(
        SearchRequest(reference_point=None, query_text="L", exclude_ids={"456"})
    )
    assert [r.id for r in results] == ["123"]
    assert all(r.distance is None for r in results)


@pytest.mark.asyncio
async def test_empty_query_returns_all_rows_ranked(repo, near_london):
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(SearchRequest(reference_point=near_london))
    assert [r.id for r in results] == ["456", "123"]


@pytest.mark.asyncio
async def test_query_matches_country(repo):
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(SearchRequest(query_text="uk"))
    assert [r.display_name for r in results] == ["London, UK"]


@pytest.mark.asyncio
async def test_results_sorted_and_bounded(make_repo):
    """Many candidates: results are ascending and never exceed the limit."""
    rows = [
        SearchableEntity(id=str(i), name=f"City {i}", country="X",
                         latitude=(i * 7) % 80, longitude=(i * 13) % 170)
        for i in range(50)
    ]
    uc = ProximitySearchUseCase(make_repo({"cities": rows}))
    results = await uc.find_closest_cities(
        SearchRequest(reference_point=GeoPoint(latitude=10.0, longitude=10.0), limit=15)
    )
    assert len(results) == 15
    distances = [r.distance for r in results]
    assert all(a <= b for a, b in zip(distances, distances[1:]))


@pytest.mark.asyncio
async def test_repository_receives_filter(repo, near_slc):
    uc = ProximitySearchUseCase(repo)
    await uc.find_closest_cities(
        SearchRequest(reference_point=near_slc, query_text="Lon", exclude_ids=["x"])
    )
    table, text_filter, exclude_ids = repo.calls[-1]
    assert table == "cities"
    assert text_filter.fields == ("name", "country")
    assert text_filter.text == "Lon"
    assert exclude_ids == frozenset({"x"})


# ─── Starport search ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_starports_match_name_only(repo, near_london):
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_starports(
        SearchRequest(reference_point=near_london, query_text="starport")
    )
    assert [r.display_name for r in results] == ["Heathrow Starport", "Salt Lake Starport"]


@pytest.mark.asyncio
async def test_find_closest_starport(repo, near_slc):
    uc = ProximitySearchUseCase(repo)
    result = await uc.find_closest_starport(near_slc)
    assert result is not None
    assert result.id == "sp-1"
    assert result.distance is not None


@pytest.mark.asyncio
async def test_find_closest_starport_empty_table(make_repo):
    uc = ProximitySearchUseCase(make_repo({}))
    assert await uc.find_closest_starport(GeoPoint(latitude=0.0, longitude=0.0)) is None


# ─── Errors ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_invalid_limit_rejected_before_storage(repo):
    uc = ProximitySearchUseCase(repo)
    with pytest.raises(InvalidSearchRequestError):
        await uc.find_closest_cities(SearchRequest(limit=0))
    assert repo.calls == []


@pytest.mark.asyncio
async def test_out_of_range_reference_point_rejected(repo):
    uc = ProximitySearchUseCase(repo)
    with pytest.raises(InvalidSearchRequestError, match="out of range"):
        await uc.find_closest_cities(
            SearchRequest(reference_point=GeoPoint(latitude=-111.0, longitude=60.0))
        )


@pytest.mark.asyncio
async def test_storage_error_propagates(unavailable_repo, near_slc):
    """An unreachable store is an error, not an empty result."""
    uc = ProximitySearchUseCase(unavailable_repo)
    with pytest.raises(StorageUnavailableError):
        await uc.find_closest_cities(SearchRequest(reference_point=near_slc))


@pytest.mark.asyncio
async def test_single_string_exclude_removes_that_id(repo, near_london):
    uc = ProximitySearchUseCase(repo)
    results = await uc.find_closest_cities(
        SearchRequest(reference_point=near_london, query_text="L", exclude_ids="456")
    )
    assert [r.id for r in results] == ["123"]
