"""
FastAPI application entry point for the workforce dashboard API.

Configures logging, CORS and the database pool lifecycle, mounts the report
routers under /api and exposes the health and service-info endpoints.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wfm_dashboard import __version__
from wfm_dashboard.api import api_router
from wfm_dashboard.core.config import get_settings
from wfm_dashboard.core.database import STORAGE_FAILURES, close_db, init_db, ping
from wfm_dashboard.core.exceptions import DashboardError, ValidationError
from wfm_dashboard.models.enums import HealthStatus
from wfm_dashboard.models.schemas import HealthResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Initialize the database pool on startup and close it on shutdown.

    A database that is down at startup does not stop the API: the pool is
    created lazily on the first request and /api/health reports the outage.
    """
    logger.info("Workforce dashboard API starting")
    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except STORAGE_FAILURES as e:
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Workforce dashboard API shutting down")
    await close_db()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="Workforce Dashboard API",
    version=__version__,
    description=(
        "Reporting backend for the workforce planning dashboard: reference "
        "data, headcount KPIs, skills, activity staffing and planning "
        "utilization reports."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    """Errors raised outside an endpoint body, e.g. while acquiring a connection."""
    status_code = 400 if isinstance(exc, ValidationError) else 500
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


app.include_router(api_router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """
    Database connectivity probe.

    Returns 200 with status 'connected', or 500 with status 'disconnected'.
    """
    connected = await ping()
    payload = HealthResponse(
        status=HealthStatus.CONNECTED if connected else HealthStatus.DISCONNECTED,
        timestamp=datetime.now(timezone.utc),
    )
    if not connected:
        return JSONResponse(status_code=500, content=payload.model_dump(mode='json'))
    return payload


@app.get("/")
async def root():
    """API name, version and documentation links."""
    return {
        "name": "Workforce Dashboard API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "wfm_dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
