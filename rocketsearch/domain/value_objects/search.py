"""Search value objects — request, result and text filter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from rocketsearch.domain.entities.searchable import SearchableEntity
from rocketsearch.domain.value_objects.geo_point import GeoPoint

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class SearchRequest:
    """Input of a proximity search.

    ``reference_point=None`` asks for a text-only search: no distances are
    computed and results keep the storage order.
    """

    reference_point: GeoPoint | None = None
    query_text: str = ""
    exclude_ids: frozenset[str] = field(default_factory=frozenset)
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        # A bare string is one id, not an iterable of characters
        if isinstance(self.exclude_ids, str):
            object.__setattr__(self, "exclude_ids", frozenset({self.exclude_ids}))
        elif not isinstance(self.exclude_ids, frozenset):
            object.__setattr__(self, "exclude_ids", frozenset(self.exclude_ids))
        if self.query_text is None:
            object.__setattr__(self, "query_text", "")


@dataclass(frozen=True)
class SearchResult:
    id: str
    display_name: str
    distance: float | None  # miles; None when no reference point

    def to_dict(self) -> dict:
        return {"id": self.id, "displayName": self.display_name, "distance": self.distance}


@dataclass(frozen=True)
class TextFilter:
    """Case-insensitive substring match against any of ``fields``.

    An empty ``text`` matches every row.
    """

    fields: tuple[str, ...]
    text: str = ""

    @classmethod
    def build(cls, fields: Iterable[str], text: str | None) -> TextFilter:
        return cls(fields=tuple(fields), text=text or "")

    @property
    def is_empty(self) -> bool:
        return self.text == ""

    def matches(self, entity: SearchableEntity) -> bool:
        if self.is_empty:
            return True
        # lower() rather than casefold(): ILIKE does not fold ß to ss
        needle = self.text.lower()
        for name in self.fields:
            value = entity.field_value(name)
            if value is not None and needle in value.lower():
                return True
        return False
