"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rocketsearch.adapters.persistence.database import get_session
from rocketsearch.adapters.persistence.repositories import SqlSearchableRepository
from rocketsearch.application.use_cases.proximity_search import ProximitySearchUseCase
from rocketsearch.config import settings


def get_searchable_repo(session: AsyncSession = Depends(get_session)) -> SqlSearchableRepository:
    return SqlSearchableRepository(session)


def get_proximity_search_uc(
    repo: SqlSearchableRepository = Depends(get_searchable_repo),
) -> ProximitySearchUseCase:
    return ProximitySearchUseCase(repo=repo)


def get_result_limit() -> int:
    return settings.search_result_limit
