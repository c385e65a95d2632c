"""SQLAlchemy repository implementations."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import Select, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rocketsearch.adapters.persistence.models import CityModel, StarportModel
from rocketsearch.application.ports.searchable_repo import SearchableRepository
from rocketsearch.domain.entities.searchable import SearchableEntity
from rocketsearch.domain.errors import InvalidSearchRequestError, StorageUnavailableError
from rocketsearch.domain.value_objects.search import TextFilter

logger = logging.getLogger(__name__)

TABLE_MODELS: dict[str, type[CityModel] | type[StarportModel]] = {
    CityModel.__tablename__: CityModel,
    StarportModel.__tablename__: StarportModel,
}

LIKE_ESCAPE = "\\"

# ─── Mappers ─────────────────────────────────────────────────────────


def _row_to_domain(m: CityModel | StarportModel) -> SearchableEntity:
    return SearchableEntity(
        id=m.id,
        name=m.name,
        latitude=m.latitude,
        longitude=m.longitude,
        country=getattr(m, "country", None),
    )


# ─── Query building ──────────────────────────────────────────────────


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user text is matched literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_search_query(
    table: str,
    text_filter: TextFilter,
    exclude_ids: frozenset[str],
) -> Select:
    """Build the parameterized SELECT for one search.

    Text is bound as a parameter (never interpolated) and matched with
    ILIKE '%text%' across the filter's columns; exclusions become NOT IN.
    """
    model = TABLE_MODELS.get(table)
    if model is None:
        raise InvalidSearchRequestError(f"Unknown searchable table: {table!r}")

    stmt = select(model)

    if not text_filter.is_empty:
        pattern = f"%{escape_like(text_filter.text)}%"
        clauses = []
        for field_name in text_filter.fields:
            column = getattr(model, field_name, None)
            if column is None:
                raise InvalidSearchRequestError(f"Table {table!r} has no field {field_name!r}")
            clauses.append(column.ilike(pattern, escape=LIKE_ESCAPE))
        stmt = stmt.where(or_(*clauses))

    if exclude_ids:
        stmt = stmt.where(model.id.not_in(sorted(exclude_ids)))

    return stmt.order_by(model.name, model.id)


# ─── Repositories ────────────────────────────────────────────────────


class SqlSearchableRepository(SearchableRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def query_rows(
        self,
        table: str,
        text_filter: TextFilter,
        exclude_ids: frozenset[str],
    ) -> list[SearchableEntity]:
        stmt = build_search_query(table, text_filter, exclude_ids)
        try:
            result = await self._s.execute(stmt)
            rows = [_row_to_domain(m) for m in result.scalars()]
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.exception("Query against %s failed", table)
            raise StorageUnavailableError(f"Could not query {table}: {e}") from e
        return rows
