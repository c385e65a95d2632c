"""Rocket Rental search — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rocketsearch.adapters.persistence.database import engine
from rocketsearch.domain.errors import InvalidSearchRequestError, StorageUnavailableError
from rocketsearch.infrastructure.api.routes_health import router as health_router
from rocketsearch.infrastructure.api.routes_search import router as search_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


async def _invalid_request_handler(request: Request, exc: InvalidSearchRequestError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def _storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    logger.error("Search unavailable for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Search is temporarily unavailable"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Rocket Rental — Proximity Search",
        description="Nearest city / starport search for the Rocket Rental marketplace",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(InvalidSearchRequestError, _invalid_request_handler)
    app.add_exception_handler(StorageUnavailableError, _storage_unavailable_handler)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(search_router, prefix="/api")

    return app


app = create_app()
