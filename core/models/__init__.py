# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - warehouse.py: Warehouses, occupant allocations, availability results
# - user.py: Users and the role hierarchy
# - session.py: Server-side login sessions
# - pricing.py: Pricing rates and the mezzanine discount audit
#
# These models define the "contract" between API and clients.
# =============================================================================

from .warehouse import (
    AvailabilityResponse,
    AvailabilityResult,
    FloorType,
    OccupantAllocation,
    Warehouse,
    WarehouseAvailability,
    WarehouseAvailabilityList,
)

from .user import Role, User, has_any_role, has_role

from .session import IssuedSession, SessionRecord

from .pricing import MezzanineAuditReport, MezzanineRateCheck, PricingRate

__all__ = [
    # Warehouse
    "AvailabilityResponse",
    "AvailabilityResult",
    "FloorType",
    "OccupantAllocation",
    "Warehouse",
    "WarehouseAvailability",
    "WarehouseAvailabilityList",
    # User
    "Role",
    "User",
    "has_any_role",
    "has_role",
    # Session
    "IssuedSession",
    "SessionRecord",
    # Pricing
    "MezzanineAuditReport",
    "MezzanineRateCheck",
    "PricingRate",
]
