"""
FastAPI application for Interview Calendar Sync.

This is the main entry point for the HTTP API, providing:
- Calendar event create/update/delete for scheduled interviews
- Health and status endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from src.api.calendar_routes import router as calendar_router
from src.api.middleware import RequestLoggingMiddleware
from src.api.models import HealthResponse
from src.calendar_sync import IntegrationNotFoundError
from src.config import configure_logging, get_settings
from src.database import check_connection, init_db

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()
    logger.info("Starting Interview Calendar Sync API")
    if get_settings().is_development:
        await init_db()
    logger.info("Interview Calendar Sync API started")

    yield

    logger.info("Shutting down Interview Calendar Sync API")


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Interview Calendar Sync API",
    description="""
# Interview Calendar Sync API

Keeps a user's connected calendar in step with their scheduled interviews.

## Endpoints

- **POST /calendar/events** - Interview scheduled
- **PUT /calendar/events/{event_id}** - Interview rescheduled
- **DELETE /calendar/events/{event_id}** - Interview cancelled

The calling user is identified by the `X-User-ID` header.

## Error Handling

**Deleting an event that no longer exists is not an error** - returns 200.

- **200** - Success
- **400** - Calendar not connected for this user
- **401** - Missing X-User-ID header
- **422** - Validation error
- **502** - Calendar provider rejected the call (body holds the error code/message)
- **500** - Server error
    """,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add middleware
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(calendar_router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_type": "http_error",
            "message": exc.detail,
            "retryable": exc.status_code >= 500,
        },
    )


@app.exception_handler(IntegrationNotFoundError)
async def integration_not_found_handler(request, exc: IntegrationNotFoundError):
    """Handle users who have not connected a calendar."""
    logger.info(f"Calendar not connected for user {exc.user_id}")
    return JSONResponse(
        status_code=400,
        content={
            "error_type": "not_connected",
            "message": "Calendar not connected",
            "retryable": False,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error_type": "internal_error",
            "message": "An unexpected error occurred",
            "retryable": True,
        },
    )


# =============================================================================
# Health & Status Endpoints
# =============================================================================


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    tags=["System"],
)
async def health_check():
    """
    Check API health status.

    Returns:
        Health status including database connectivity
    """
    database_connected = await check_connection()

    return HealthResponse(
        status="healthy" if database_connected else "unhealthy",
        version=API_VERSION,
        database_connected=database_connected,
    )


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the API server with Uvicorn."""
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    settings = get_settings()
    run_server(host=settings.api_host, port=settings.api_port, reload=settings.is_development)
