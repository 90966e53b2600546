# src/hitcounter/main.py
"""Main entry point for the hit counter application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hitcounter.api.v1 import admin_router, counter_router, sites_router
from hitcounter.api.v1.dependencies import HealthReporterDep
from hitcounter.core.errors import HitCounterError, StoreError
from hitcounter.core.logging_config import configure_logging
from hitcounter.core.settings import settings
from hitcounter.schemas.health import HealthResponse
from hitcounter.services.accounts import resolve_admin_secret
from hitcounter.services.store import close_store, get_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    try:
        app.state.admin_secret = await resolve_admin_secret(get_store(), settings.admin_secret)
    except StoreError:
        logger.error("Could not read the admin secret from the store; registration disabled")
        app.state.admin_secret = None
    yield
    await close_store()


# Initialize FastAPI app
app = FastAPI(
    title="Hit Counter API",
    description="Multi-tenant page hit counters",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(counter_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(sites_router, prefix="/api/v1")


@app.exception_handler(HitCounterError)
async def hit_counter_error_handler(request: Request, exc: HitCounterError) -> JSONResponse:
    """Translate core failures into HTTP responses."""
    if isinstance(exc, StoreError):
        logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/health", response_model=HealthResponse)
async def health_check(reporter: HealthReporterDep) -> HealthResponse:
    """Health check endpoint reporting store connectivity."""
    report = await reporter.health()
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        store_status=report.store_status,
        ping_ms=report.ping_ms,
    )


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Multi-tenant page hit counters",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("hitcounter.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
