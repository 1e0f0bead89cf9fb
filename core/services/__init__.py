# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .availability_service import AvailabilityService, calculate_availability
from .pricing_service import PricingService, audit_mezzanine_rates, mezzanine_rate
from .session_service import SessionService, get_session_service
from .session_store import (
    InMemorySessionStore,
    SessionStore,
    SupabaseSessionStore,
    create_session_store,
)

__all__ = [
    "AvailabilityService",
    "calculate_availability",
    "PricingService",
    "audit_mezzanine_rates",
    "mezzanine_rate",
    "SessionService",
    "get_session_service",
    "InMemorySessionStore",
    "SessionStore",
    "SupabaseSessionStore",
    "create_session_store",
]
