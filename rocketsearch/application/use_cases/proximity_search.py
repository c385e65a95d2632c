"""ProximitySearchUseCase — filter → distance → rank for cities and starports."""

from __future__ import annotations

import logging

from rocketsearch.application.ports.searchable_repo import SearchableRepository
from rocketsearch.domain.errors import InvalidSearchRequestError, StorageUnavailableError
from rocketsearch.domain.policies.entity_adapters import (
    CITY_ADAPTER,
    STARPORT_ADAPTER,
    EntityAdapter,
)
from rocketsearch.domain.policies.ranking import (
    annotate_distances,
    rank_candidates,
    validate_limit,
)
from rocketsearch.domain.value_objects.geo_point import GeoPoint
from rocketsearch.domain.value_objects.search import SearchRequest, SearchResult, TextFilter

logger = logging.getLogger(__name__)


class ProximitySearchUseCase:
    """Ranks cities / starports by distance from a reference point."""

    def __init__(self, repo: SearchableRepository):
        self._repo = repo

    async def search(self, adapter: EntityAdapter, request: SearchRequest) -> list[SearchResult]:
        """Run one search against the table described by ``adapter``.

        Pipeline:
        1. Validate the request (limit, reference point range)
        2. Read filtered rows from storage (text match + exclusions)
        3. Annotate with distance from the reference point, if any
        4. Stable sort by distance and truncate to the limit

        Raises:
            InvalidSearchRequestError: limit <= 0 or out-of-range reference point.
            StorageUnavailableError: storage could not be read.
        """
        validate_limit(request.limit)
        point = request.reference_point
        if point is not None and not point.is_valid():
            raise InvalidSearchRequestError(
                f"Reference point out of range: lat={point.latitude}, long={point.longitude}"
            )

        text_filter = TextFilter.build(adapter.text_fields, request.query_text)
        logger.debug(
            "Searching %s: query=%r, exclude=%d, geo=%s, limit=%d",
            adapter.table, text_filter.text, len(request.exclude_ids),
            point is not None, request.limit,
        )

        try:
            rows = await self._repo.query_rows(adapter.table, text_filter, request.exclude_ids)
        except StorageUnavailableError:
            logger.error("Storage unavailable while searching %s", adapter.table)
            raise

        ranked = rank_candidates(annotate_distances(rows, point), request.limit)
        return [
            SearchResult(
                id=c.entity.id,
                display_name=adapter.display_name(c.entity),
                distance=c.distance,
            )
            for c in ranked
        ]

    async def find_closest_cities(self, request: SearchRequest) -> list[SearchResult]:
        return await self.search(CITY_ADAPTER, request)

    async def find_closest_starports(self, request: SearchRequest) -> list[SearchResult]:
        return await self.search(STARPORT_ADAPTER, request)

    async def find_closest_starport(self, point: GeoPoint) -> SearchResult | None:
        """Nearest starport to ``point`` (no text filter, no exclusions), or None."""
        results = await self.find_closest_starports(
            SearchRequest(reference_point=point, limit=1)
        )
        return results[0] if results else None
