# =============================================================================
# core/services/availability_service.py - Warehouse Space Availability
# =============================================================================
# The single place where warehouse availability is computed.
#
# For one warehouse and one floor type:
#   total       = declared capacity of the floor
#   occupied    = sum of space_occupied over ACTIVE allocations on that floor
#   available   = max(total - occupied, 0)
#   utilization = occupied / total * 100, or 0 when total is 0
#
# calculate_availability() is pure and works on an in-memory snapshot;
# AvailabilityService wraps it with the Supabase lookups and error mapping.
# =============================================================================

import logging
from typing import Any, Iterable
from uuid import UUID

from pydantic import ValidationError

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.warehouse import (
    AvailabilityResponse,
    AvailabilityResult,
    FloorType,
    OccupantAllocation,
    Warehouse,
    WarehouseAvailability,
)
from app.exceptions import (
    DataStoreUnavailableError,
    InvalidSpaceTypeError,
    WarehouseNotFoundError,
)

logger = logging.getLogger(__name__)


def calculate_availability(
    warehouse: Warehouse,
    allocations: Iterable[OccupantAllocation],
    floor_type: FloorType,
) -> AvailabilityResult:
    """
    Compute availability of one floor of a warehouse.

    Only active allocations of this warehouse on the requested floor are
    summed. Over-allocation (occupied > total) clamps available space to 0
    instead of failing.

    Args:
        warehouse: The warehouse whose capacity is used
        allocations: Occupant allocations (other floors/warehouses are ignored)
        floor_type: Which floor to compute

    Returns:
        AvailabilityResult with total, occupied, available and utilization

    Example:
        >>> wh = Warehouse(id="w1", total_space=1000)
        >>> alloc = OccupantAllocation(warehouse_id="w1", floor_type="Ground Floor",
        ...                            space_occupied=300, status="active")
        >>> calculate_availability(wh, [alloc], FloorType.GROUND_FLOOR).available_space
        700.0
    """
    total = warehouse.capacity_for(floor_type)

    occupied = sum(
        allocation.space_occupied
        for allocation in allocations
        if allocation.warehouse_id == warehouse.id
        and allocation.is_active
        and allocation.occupies(floor_type)
    )
    occupied = float(occupied)

    if occupied > total:
        logger.warning(
            f"Warehouse {warehouse.id} {floor_type.value} is over-allocated: "
            f"{occupied} m² occupied of {total} m²"
        )

    available = max(total - occupied, 0.0)
    utilization = occupied * 100 / total if total > 0 else 0.0

    return AvailabilityResult(
        total_space=total,
        occupied_space=occupied,
        available_space=available,
        utilization_percentage=utilization,
    )


def _parse_allocations(rows: list[dict[str, Any]]) -> list[OccupantAllocation]:
    """Parse allocation rows, skipping (and logging) rows that don't validate."""
    allocations = []
    for row in rows:
        try:
            allocations.append(OccupantAllocation.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping malformed occupant row {row.get('id')}: {e}")
    return allocations


class AvailabilityService:
    """
    Service for warehouse availability queries.

    Read-only: every call recomputes from the current table contents.
    """

    @staticmethod
    def get_warehouse(warehouse_id: str | UUID) -> Warehouse:
        """
        Load a warehouse.

        Raises:
            WarehouseNotFoundError: If the warehouse doesn't exist
            DataStoreUnavailableError: If the lookup fails
        """
        warehouse_id_str = str(warehouse_id)

        try:
            row = SupabaseClient.fetch_warehouse(warehouse_id_str)
        except SupabaseClientError as e:
            logger.error(f"Failed to load warehouse {warehouse_id_str}: {e}")
            raise DataStoreUnavailableError("fetch_warehouse") from e

        if not row:
            raise WarehouseNotFoundError(warehouse_id_str)

        return Warehouse.model_validate(row)

    @staticmethod
    def compute_availability(
        warehouse_id: str | UUID,
        space_type: str | FloorType | None,
    ) -> AvailabilityResponse:
        """
        Compute availability of one floor of a warehouse.

        Args:
            warehouse_id: The warehouse UUID
            space_type: "Ground Floor" or "Mezzanine" (aliases accepted)

        Returns:
            AvailabilityResponse with the four figures plus the inputs

        Raises:
            InvalidSpaceTypeError: If space_type is not a known floor type
            WarehouseNotFoundError: If the warehouse doesn't exist
            DataStoreUnavailableError: If a query fails (safe to retry)
        """
        try:
            floor_type = FloorType.parse(space_type)
        except ValueError:
            raise InvalidSpaceTypeError(
                None if space_type is None else str(space_type),
                FloorType.labels(),
            )

        warehouse = AvailabilityService.get_warehouse(warehouse_id)

        # Nothing can be allocated on a mezzanine that doesn't exist
        if floor_type == FloorType.MEZZANINE and not warehouse.has_mezzanine:
            allocations: list[OccupantAllocation] = []
        else:
            try:
                rows = SupabaseClient.fetch_occupants(warehouse.id)
            except SupabaseClientError as e:
                logger.error(f"Failed to load occupants for warehouse {warehouse.id}: {e}")
                raise DataStoreUnavailableError("fetch_occupants") from e
            allocations = _parse_allocations(rows)

        result = calculate_availability(warehouse, allocations, floor_type)
        logger.debug(
            f"Availability for {warehouse.id} {floor_type.value}: "
            f"{result.available_space}/{result.total_space} m² free"
        )

        return AvailabilityResponse(
            warehouse_id=warehouse.id,
            space_type=floor_type,
            **result.model_dump(),
        )

    @staticmethod
    def availability_for_warehouse(warehouse: Warehouse) -> WarehouseAvailability:
        """
        Compute Ground Floor and (if present) Mezzanine availability.

        All allocations of the warehouse are fetched in one query and
        split per floor in memory.

        Raises:
            DataStoreUnavailableError: If the occupant query fails
        """
        try:
            rows = SupabaseClient.fetch_occupants(warehouse.id)
        except SupabaseClientError as e:
            logger.error(f"Failed to load occupants for warehouse {warehouse.id}: {e}")
            raise DataStoreUnavailableError("fetch_occupants") from e

        allocations = _parse_allocations(rows)

        mezzanine = None
        if warehouse.has_mezzanine:
            mezzanine = calculate_availability(warehouse, allocations, FloorType.MEZZANINE)

        return WarehouseAvailability(
            id=warehouse.id,
            name=warehouse.name,
            location=warehouse.location,
            has_mezzanine=warehouse.has_mezzanine,
            ground=calculate_availability(warehouse, allocations, FloorType.GROUND_FLOOR),
            mezzanine=mezzanine,
        )

    @staticmethod
    def list_warehouse_availability() -> list[WarehouseAvailability]:
        """
        Availability of every active warehouse, ordered by name.

        Raises:
            DataStoreUnavailableError: If a query fails
        """
        try:
            rows = SupabaseClient.fetch_warehouses(status="active")
        except SupabaseClientError as e:
            logger.error(f"Failed to list warehouses: {e}")
            raise DataStoreUnavailableError("fetch_warehouses") from e

        warehouses = []
        for row in rows:
            try:
                warehouses.append(Warehouse.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping malformed warehouse row {row.get('id')}: {e}")

        return [
            AvailabilityService.availability_for_warehouse(warehouse)
            for warehouse in warehouses
        ]
