"""
Defect Monitor API

A FastAPI service for recording manufacturing defects, listing them with
filters, and serving chart-ready analytics.

Main application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from defect_monitor import __version__
from defect_monitor.api import constants as routes_constants
from defect_monitor.api import routes_analytics, routes_health, routes_records
from defect_monitor.core import database
from defect_monitor.core.config import get_settings
from defect_monitor.core.logging import get_logger, setup_logging
from defect_monitor.core.middleware import RequestLoggingMiddleware

# Import all models to ensure they're registered with Base
from defect_monitor.models import DefectRecord  # noqa: F401

settings = get_settings()

setup_logging(settings.log_level, settings.log_format)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup fails if the record store endpoint or credential is missing.
    """
    await database.init_db()
    await database.create_tables()

    url = get_settings().store_url()
    logger.info(
        "Defect Monitor API starting",
        host=settings.api_host,
        port=settings.api_port,
        database=url.render_as_string(hide_password=True),
        cors_origins=settings.cors_origins,
    )

    yield

    logger.info("Defect Monitor API shutting down")
    await database.close_db()


app = FastAPI(
    title="Defect Monitor API",
    description="""
    ## Manufacturing defect logging

    ### Views
    - **Data entry**: `POST /api/records` with duplicate rejection
    - **Data list**: `GET /api/records` filtered by process, cause and period
    - **Analytics**: `GET /api/analytics` daily / per-process / per-cause counts

    ### Submission outcomes
    - `created` (201), `validation_failed` (422), `duplicate` (409),
      `check_failed` / `insert_failed` (503)
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "X-Request-ID"],
)

app.add_middleware(GZipMiddleware, minimum_size=1024)

app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors."""
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": getattr(request.state, "request_id", "unknown"),
        }
    )


app.include_router(
    routes_health.router,
    prefix="/healthz",
    tags=["Health Check"]
)

app.include_router(
    routes_records.router,
    prefix="/api/records",
    tags=["Records"],
)

app.include_router(
    routes_analytics.router,
    prefix="/api/analytics",
    tags=["Analytics"],
)

app.include_router(routes_constants.router)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint with basic API information."""
    return {
        "message": "Defect Monitor API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "health": "/healthz"
    }


def run() -> None:
    """Run the API with uvicorn (console script entry point)."""
    uvicorn.run(
        "defect_monitor.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()
