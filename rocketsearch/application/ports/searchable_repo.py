"""Port interface for reading searchable rows (cities, starports)."""

from abc import ABC, abstractmethod

from rocketsearch.domain.entities.searchable import SearchableEntity
from rocketsearch.domain.value_objects.search import TextFilter


class SearchableRepository(ABC):
    @abstractmethod
    async def query_rows(
        self,
        table: str,
        text_filter: TextFilter,
        exclude_ids: frozenset[str],
    ) -> list[SearchableEntity]:
        """Return rows of ``table`` matching ``text_filter`` and not in ``exclude_ids``.

        Rows come back in a stable storage order (name, then id).

        Raises:
            StorageUnavailableError: if the store cannot be queried.
        """
        ...
