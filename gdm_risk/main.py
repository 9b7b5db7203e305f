"""FastAPI application for the GDM Risk Engine."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gdm_risk import __version__
from gdm_risk.api import assessment_router
from gdm_risk.core.config import settings
from gdm_risk.core.logging import configure_logging
from gdm_risk.services.gdm_risk import get_gdm_risk_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and creates the scoring service before the first
    request so readiness reflects a loaded rule table.
    """
    startup_start = time.perf_counter()

    configure_logging("DEBUG" if settings.debug else settings.log_level)

    service_stats = get_gdm_risk_service().get_stats()
    logger.info(
        f"GDM risk service ready: {service_stats['total_rules']} rules, "
        f"{service_stats['total_bands']} bands"
    )

    app.state.service_stats = service_stats
    app.state.startup_time_ms = (time.perf_counter() - startup_start) * 1000

    yield


app = FastAPI(
    title=settings.app_name,
    description="Deterministic gestational diabetes risk scoring from routine prenatal measurements.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assessment_router, prefix=settings.api_v1_prefix)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, Any]:
    """Health check endpoint (liveness probe)."""
    return {
        "status": "healthy",
        "service": "gdm-risk-engine",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, Any]:
    """Readiness check endpoint.

    Reports the loaded scoring tables.
    """
    return {
        "status": "ready",
        "service": "gdm-risk-engine",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
        "startup_time_ms": getattr(app.state, "startup_time_ms", 0),
        "scoring": get_gdm_risk_service().get_stats(),
    }


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "service": f"{settings.app_name} API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
    }


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "gdm_risk.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
