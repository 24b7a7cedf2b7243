"""Carhire Pricing API -- Main Application Entry Point

Creates the FastAPI application, configures logging and CORS middleware, and
registers all API route modules under the /api/v1 prefix.

Run with::

    uvicorn carhire.main:app --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carhire.core.config import settings
from carhire.core.logging import configure_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup; dispose the DB engine on shutdown."""
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)

    yield

    from carhire.api.deps import engine

    await engine.dispose()


# ---------------------------------------------------------------------------
# Application instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# CORS middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health():
    """Liveness probe; does not touch the database."""
    return {"status": "ok", "version": settings.app_version}


# ---------------------------------------------------------------------------
# Register API route modules
# ---------------------------------------------------------------------------
# Each router already defines its own prefix (e.g. /pricing, /seasons) and
# tags.  We mount them under the shared /api/v1 prefix.
# ---------------------------------------------------------------------------

from carhire.api.routes import (  # noqa: E402
    pricing,
    reservations,
    seasons,
    transferPricing,
)

_prefix = settings.api_v1_prefix

app.include_router(pricing.router, prefix=_prefix)
app.include_router(seasons.router, prefix=_prefix)
app.include_router(transferPricing.router, prefix=_prefix)
app.include_router(reservations.router, prefix=_prefix)
