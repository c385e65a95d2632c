"""Pytest configuration and shared fixtures."""

import pytest

from rocketsearch.application.ports.searchable_repo import SearchableRepository
from rocketsearch.domain.entities.searchable import SearchableEntity
from rocketsearch.domain.errors import StorageUnavailableError
from rocketsearch.domain.value_objects.geo_point import GeoPoint

# ─── In-memory fakes ────────────────────────────────────────────────


class InMemorySearchableRepository(SearchableRepository):
    """Fake storage: tables are lists kept in insertion order."""

    def __init__(self, tables: dict[str, list[SearchableEntity]] | None = None):
        self.tables = tables or {}
        self.calls: list[tuple] = []

    async def query_rows(self, table, text_filter, exclude_ids):
        self.calls.append((table, text_filter, exclude_ids))
        rows = self.tables.get(table, [])
        return [r for r in rows if r.id not in exclude_ids and text_filter.matches(r)]


class UnavailableRepository(SearchableRepository):
    async def query_rows(self, table, text_filter, exclude_ids):
        raise StorageUnavailableError("connection refused")


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def slc():
    return SearchableEntity(
        id="123", name="Salt Lake City", country="US",
        latitude=40.7765868, longitude=-111.9905245,
    )


@pytest.fixture
def london():
    return SearchableEntity(
        id="456", name="London", country="UK",
        latitude=51.5282914, longitude=-0.3886621,
    )


@pytest.fixture
def near_slc():
    return GeoPoint(latitude=39.7765868, longitude=-110.9905245)


@pytest.fixture
def near_london():
    return GeoPoint(latitude=50.5282914, longitude=-1.3886621)


@pytest.fixture
def starports():
    return [
        SearchableEntity(id="sp-1", name="Salt Lake Starport", latitude=40.7765868, longitude=-111.9905245),
        SearchableEntity(id="sp-2", name="Heathrow Starport", latitude=51.4700223, longitude=-0.4542955),
        SearchableEntity(id="sp-3", name="Luna Gateway", latitude=51.5282914, longitude=-0.3886621),
    ]


@pytest.fixture
def make_repo():
    return InMemorySearchableRepository


@pytest.fixture
def repo(slc, london, starports):
    return InMemorySearchableRepository({"cities": [slc, london], "starports": list(starports)})


@pytest.fixture
def unavailable_repo():
    return UnavailableRepository()
