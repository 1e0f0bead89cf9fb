# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness and readiness probes. None of these require a session.
#
#   /health        - process is up, reports environment and version
#   /health/ready  - database reachable and session store usable
#   /health/live   - process is alive (restart probe)
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.utils import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"
HEALTHY = "healthy"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessChecks(BaseModel):
    """Result per dependency: "healthy" or "unhealthy: <reason>"."""
    database: str
    session_store: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ReadinessChecks
    session_backend: str
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _check_database() -> str:
    # Imported here so the app can start (and report degraded) without a database
    from lib.supabase_client import SupabaseClient, SupabaseClientError

    try:
        SupabaseClient.ping()
    except SupabaseClientError as e:
        logger.warning(f"Readiness: database check failed: {e}")
        return f"unhealthy: {e.message[:50]}"
    return HEALTHY


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic status for load balancers and monitoring."""
    return HealthResponse(
        status=HEALTHY,
        timestamp=utc_now().isoformat(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Whether the service can answer availability requests.

    Sessions stored in Supabase share the database check; the in-memory
    store is always usable. Returns "degraded" (still 200) when any
    check fails.
    """
    database = _check_database()
    session_store = database if settings.SESSION_BACKEND == "supabase" else HEALTHY

    checks = ReadinessChecks(database=database, session_store=session_store)
    all_healthy = database == HEALTHY and session_store == HEALTHY

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        session_backend=settings.SESSION_BACKEND,
        timestamp=utc_now().isoformat(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=utc_now().isoformat())
