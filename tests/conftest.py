# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides common fixtures for testing
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.services.session_service import SessionService
from core.services.session_store import InMemorySessionStore


# =============================================================================
# Fixtures
# =============================================================================

WAREHOUSE_ID = "550e8400-e29b-41d4-a716-446655440000"
USER_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


@pytest.fixture
def warehouse_row():
    """A warehouses row with both floors."""
    return {
        "id": WAREHOUSE_ID,
        "name": "Sitra Warehouse A",
        "location": "Sitra",
        "status": "active",
        "total_space": 1000,
        "has_mezzanine": True,
        "mezzanine_space": 400,
    }


@pytest.fixture
def occupant_rows():
    """warehouse_occupants rows covering active and inactive statuses."""
    return [
        {"id": "o1", "warehouse_id": WAREHOUSE_ID, "name": "Acme Trading",
         "floor_type": "Ground Floor", "space_occupied": 300, "status": "active"},
        {"id": "o2", "warehouse_id": WAREHOUSE_ID, "name": "Gulf Logistics",
         "floor_type": "Ground Floor", "space_occupied": 200, "status": "completed"},
        {"id": "o3", "warehouse_id": WAREHOUSE_ID, "name": "Pearl Imports",
         "floor_type": "Mezzanine", "space_occupied": "150.5", "status": "active"},
        {"id": "o4", "warehouse_id": WAREHOUSE_ID, "name": "Delta Foods",
         "floor_type": "Mezzanine", "space_occupied": 100, "status": "pending"},
    ]


@pytest.fixture
def user_row():
    """An active users row."""
    return {
        "id": USER_ID,
        "email": "ops@example.com",
        "name": "Fatima Al Khalifa",
        "picture": None,
        "role": "MANAGER",
        "is_active": True,
    }


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def session_service(session_store):
    """SessionService over an in-memory store."""
    return SessionService(session_store, secret_key="test-secret-key-0123456789")
