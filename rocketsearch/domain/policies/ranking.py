"""Ranking policy — annotate candidates with distance, order them, apply the limit."""

from __future__ import annotations

from dataclasses import dataclass

from rocketsearch.domain.entities.searchable import SearchableEntity
from rocketsearch.domain.errors import InvalidSearchRequestError
from rocketsearch.domain.value_objects.geo_point import GeoPoint, great_circle_miles


@dataclass(frozen=True)
class Candidate:
    """A filtered row, with its distance from the reference point (if any)."""

    entity: SearchableEntity
    distance: float | None


def validate_limit(limit: int) -> int:
    """Reject anything but a positive integer."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidSearchRequestError(f"limit must be an integer, got {limit!r}")
    if limit <= 0:
        raise InvalidSearchRequestError(f"limit must be positive, got {limit}")
    return limit


def annotate_distances(
    entities: list[SearchableEntity],
    reference_point: GeoPoint | None,
) -> list[Candidate]:
    """Pair every entity with its distance in miles, or None without a reference point."""
    if reference_point is None:
        return [Candidate(entity=e, distance=None) for e in entities]
    return [
        Candidate(entity=e, distance=great_circle_miles(reference_point, e.location))
        for e in entities
    ]


def rank_candidates(candidates: list[Candidate], limit: int) -> list[Candidate]:
    """Order by ascending distance and keep at most ``limit`` entries.

    ``sorted`` is stable: equal distances keep their input order, and rows
    without a distance keep the filter order (after any ranked rows).

    Raises:
        InvalidSearchRequestError: if ``limit`` is not a positive integer.
    """
    validate_limit(limit)
    if any(c.distance is not None for c in candidates):
        candidates = sorted(
            candidates,
            key=lambda c: (c.distance is None, c.distance if c.distance is not None else 0.0),
        )
    return list(candidates[:limit])
