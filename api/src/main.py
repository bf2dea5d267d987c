"""
FastAPI application entry point for the Formula Service.

This module provides the main FastAPI application with:
- The four formula endpoints (BMI, body fat, ideal weight, calories burned)
- Health endpoint
- Request logging and Prometheus metrics
- CORS open to all origins
- Startup and shutdown logging
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from prometheus_client import CONTENT_TYPE_LATEST

from api.src.config import get_settings, Settings
from api.src.dependencies import get_metrics
from api.src.routers.formulas import router as formulas_router
from shared.logging import configure_logging
from shared.metrics import get_metrics_handler
from shared.models import HealthResponse, HealthStatus

# Get settings
settings: Settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_logs=settings.json_logs,
    service_name=settings.app_name,
)

# Initialize logger
logger = structlog.get_logger(__name__)

# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    The service holds no resources, so startup and shutdown only log.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )
    logger.info(
        "server_running",
        message=f"Server is running on http://localhost:{settings.port}",
        port=settings.port
    )

    try:
        yield
    finally:
        logger.info("application_shutdown_complete")

# ============================================================================
# FastAPI Application
# ============================================================================

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Stateless calculator for common health formulas: body mass index, "
        "body fat percentage, ideal weight and calories burned."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    debug=settings.debug,
)

# ============================================================================
# Middleware Configuration
# ============================================================================

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics."""

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        method = request.method
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        # Label by route template so unknown paths share one series
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")

        metrics = get_metrics()
        if metrics is not None:
            metrics.http_requests.labels(
                method=method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            metrics.http_request_duration.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

        logger.debug(
            "request_completed",
            method=method,
            path=request.url.path,
            query=str(request.query_params),
            status_code=response.status_code,
            duration=f"{duration:.4f}s"
        )

        return response

app.add_middleware(RequestLoggingMiddleware)

# CORS Middleware (outermost, so preflight requests never reach the handlers)
logger.info("configuring_cors", origins=settings.cors_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )

# ============================================================================
# Health Endpoint
# ============================================================================

@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    The service has no dependencies, so it is healthy whenever it answers.

    Returns:
        Health status
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

# ============================================================================
# Metrics Endpoint
# ============================================================================

if settings.metrics_enabled:
    metrics_handler = get_metrics_handler()

    @app.get(settings.metrics_endpoint, tags=["Monitoring"], response_class=PlainTextResponse)
    async def metrics() -> Response:
        """
        Prometheus metrics endpoint.

        Exposes application metrics in Prometheus format for scraping.
        """
        return Response(
            content=metrics_handler(),
            media_type=CONTENT_TYPE_LATEST
        )

# ============================================================================
# API Router Registration
# ============================================================================

app.include_router(formulas_router)

# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """
    Run the application with Uvicorn.

    A failure to bind the port is fatal and exits the process.
    """
    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
