# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Warehouse Leasing API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    LeasingAPIException,
    leasing_exception_handler,
    validation_exception_handler,
)
from app.routers import health, warehouses, pricing
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown.
    """
    logger.info(f"Starting Warehouse Leasing API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(
        f"Session backend: {settings.SESSION_BACKEND}, TTL {settings.SESSION_TTL_HOURS}h; "
        f"mezzanine discount {settings.MEZZANINE_DISCOUNT_PERCENT}%"
    )

    yield

    logger.info("Shutting down Warehouse Leasing API")


# Create FastAPI application
app = FastAPI(
    title="Warehouse Leasing API",
    description="""
## Warehouse Space Availability API

Computes leasable space per warehouse and floor type from declared
capacity and active occupant allocations.

### Availability

For a warehouse and a floor type (**Ground Floor** or **Mezzanine**):

| Field | Meaning |
|-------|---------|
| `total_space` | Declared capacity of the floor (m²) |
| `occupied_space` | Sum of active allocations on the floor (m²) |
| `available_space` | `max(total - occupied, 0)` |
| `utilization_percentage` | `occupied / total * 100`, 0 when total is 0 |

### Quick Start

```bash
curl -H "Authorization: Bearer $TOKEN" \\
  "http://localhost:8000/api/v1/warehouses/{id}/availability?space_type=Ground%20Floor"
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Inspect and end the current session",
        },
        {
            "name": "Warehouses",
            "description": "Warehouse space availability",
        },
        {
            "name": "Pricing",
            "description": "Pricing rate audits (MANAGER and above)",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(LeasingAPIException)
async def handle_leasing_exception(request: Request, exc: LeasingAPIException):
    """Handle custom API exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return await leasing_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle missing or malformed request parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    warehouses.router,
    prefix="/api/v1/warehouses",
    tags=["Warehouses"]
)

app.include_router(
    pricing.router,
    prefix="/api/v1/pricing",
    tags=["Pricing"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Warehouse Leasing API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
