# =============================================================================
# app/routers/warehouses.py - Warehouse Availability Endpoints
# =============================================================================
# Read-only availability views. All endpoints require a valid session.
#
# Errors:
#   400 - warehouse_id not a UUID, or space_type missing or unknown
#   404 - warehouse doesn't exist
#   500 - data store unavailable or unexpected failure
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import get_current_user
from core.models.user import User
from core.models.warehouse import (
    AvailabilityResponse,
    WarehouseAvailabilityList,
)
from core.services.availability_service import AvailabilityService

router = APIRouter()


@router.get("/availability", response_model=WarehouseAvailabilityList)
async def list_warehouse_availability(
    user: User = Depends(get_current_user),
):
    """
    List every active warehouse with its availability.

    Each warehouse carries a `ground` result and, if it has a mezzanine,
    a `mezzanine` result (null otherwise).
    """
    warehouses = AvailabilityService.list_warehouse_availability()

    return WarehouseAvailabilityList(
        warehouses=warehouses,
        total=len(warehouses),
    )


@router.get("/{warehouse_id}/availability", response_model=AvailabilityResponse)
async def get_warehouse_availability(
    warehouse_id: Annotated[UUID, Path(description="Warehouse ID")],
    space_type: Annotated[str, Query(
        min_length=1,
        description="Floor type: 'Ground Floor' or 'Mezzanine'",
        examples=["Ground Floor"],
    )],
    user: User = Depends(get_current_user),
):
    """
    Get space availability of one floor of a warehouse.

    Returns total, occupied and available space (m²) and the
    utilization percentage. Only active occupant allocations count.
    """
    return AvailabilityService.compute_availability(warehouse_id, space_type)
