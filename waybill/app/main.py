"""
FastAPI Application Entry Point.

This is the main application file for the Waybill fleet backend.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from waybill.app.core.config import settings
from waybill.app.api.v1.router import router as api_v1_router
from waybill.app.db.session import init_models
from waybill.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from waybill.app.core.logging_config import configure_logging
from waybill.app.core.middleware import ApiKeyMiddleware, RateLimitMiddleware
from waybill.app.core.observability import ObservabilityMiddleware
from waybill.app.core.redis_client import close_redis, ping_redis

# Import models to ensure they are registered with Base
from waybill.app.models.trip import TripModel
from waybill.app.models.driver import DriverModel
from waybill.app.models.truck import TruckModel
from waybill.app.models.facility import FacilityModel
from waybill.app.models.fuel_log import FuelLogModel
from waybill.app.models.maintenance_log import MaintenanceLogModel
from waybill.app.models.incident_report import IncidentReportModel


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    Configures logging and creates missing tables on startup; releases the
    Redis connection on shutdown.
    """
    configure_logging(settings.log_level)
    await init_models()
    yield
    await close_redis()


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Multi-tenant fleet logistics API: trips, drivers, trucks, facilities and logs",
    lifespan=lifespan,
)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Middleware, innermost first
if settings.api_key:
    app.add_middleware(ApiKeyMiddleware, api_key=settings.api_key)

if settings.rate_limit_enabled:
    app.add_middleware(
        RateLimitMiddleware,
        requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ObservabilityMiddleware)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
        "redis": "up" if await ping_redis() else "down",
    }


# Include API v1 router
app.include_router(api_v1_router, prefix=f"/{settings.api_version}")


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links
    """
    return {
        "message": "Welcome to the Waybill fleet API",
        "docs": "/docs",
        "health": "/health",
    }
