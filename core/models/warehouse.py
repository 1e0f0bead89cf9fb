# =============================================================================
# core/models/warehouse.py - Warehouse, Allocation and Availability Schemas
# =============================================================================
# These models describe the two tables availability is computed from:
# - Warehouse: a building with Ground Floor and (optional) Mezzanine capacity
# - OccupantAllocation: space leased to a client on one floor of a warehouse
#
# And the derived, never-persisted AvailabilityResult.
#
# PostgREST returns numeric columns as strings (or null) depending on the
# column type, so numeric fields are coerced on the way in.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _coerce_space(value: Any) -> float:
    """Coerce a numeric column to a float. Null, blank and garbage become 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class FloorType(str, Enum):
    """
    The two leasable space categories of a warehouse.

    Values match the labels stored in warehouse_occupants.floor_type
    and accepted by the availability endpoint.
    """
    GROUND_FLOOR = "Ground Floor"
    MEZZANINE = "Mezzanine"

    @classmethod
    def parse(cls, value: "str | FloorType | None") -> "FloorType":
        """
        Parse a floor type label.

        Case-insensitive, ignores surrounding whitespace, and accepts the
        short aliases found in older rows ("ground", "mezz").

        Raises:
            ValueError: If the label is not a recognized floor type
        """
        if isinstance(value, cls):
            return value
        if value is None:
            raise ValueError("Floor type is required")

        normalized = " ".join(str(value).strip().lower().replace("_", " ").split())
        floor_type = _FLOOR_TYPE_ALIASES.get(normalized)
        if floor_type is None:
            raise ValueError(f"Unknown floor type: {value!r}")
        return floor_type

    @classmethod
    def labels(cls) -> list[str]:
        return [member.value for member in cls]


_FLOOR_TYPE_ALIASES: dict[str, FloorType] = {
    "ground floor": FloorType.GROUND_FLOOR,
    "ground": FloorType.GROUND_FLOOR,
    "mezzanine": FloorType.MEZZANINE,
    "mezz": FloorType.MEZZANINE,
}


ACTIVE_STATUS = "active"


class Warehouse(BaseModel):
    """
    A row of the warehouses table.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Sitra Warehouse A",
            "location": "Sitra",
            "total_space": 1000,
            "has_mezzanine": true,
            "mezzanine_space": 400
        }
    """

    id: str = Field(..., description="Warehouse identifier")
    name: str = Field(default="", description="Display name")
    location: str | None = Field(default=None, description="Site location")
    status: str | None = Field(default=ACTIVE_STATUS, description="Warehouse status")

    # Ground Floor capacity in m²
    total_space: float = Field(default=0.0, ge=0, description="Ground Floor capacity (m²)")

    # Only meaningful when has_mezzanine is true
    mezzanine_space: float = Field(default=0.0, ge=0, description="Mezzanine capacity (m²)")
    has_mezzanine: bool = Field(default=False, description="Whether the warehouse has a mezzanine")

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("total_space", "mezzanine_space", mode="before")
    @classmethod
    def _coerce_numeric(cls, value: Any) -> float:
        return max(_coerce_space(value), 0.0)

    @field_validator("has_mezzanine", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "t", "yes", "1")
        return bool(value)

    def capacity_for(self, floor_type: FloorType) -> float:
        """
        Capacity of one floor type.

        A warehouse without a mezzanine has zero Mezzanine capacity,
        whatever mezzanine_space holds.
        """
        if floor_type == FloorType.GROUND_FLOOR:
            return self.total_space
        if not self.has_mezzanine:
            return 0.0
        return self.mezzanine_space


class OccupantAllocation(BaseModel):
    """
    A row of the warehouse_occupants table.

    Only allocations with an "active" status count toward occupancy.
    Legacy rows may carry the state in booking_status instead of status.
    """

    id: str | None = None
    warehouse_id: str
    name: str | None = None
    floor_type: str | None = None
    space_occupied: float = Field(default=0.0, ge=0)
    status: str | None = None
    booking_status: str | None = None

    model_config = {"extra": "ignore"}

    @field_validator("id", "warehouse_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("space_occupied", mode="before")
    @classmethod
    def _coerce_numeric(cls, value: Any) -> float:
        return max(_coerce_space(value), 0.0)

    @property
    def effective_status(self) -> str | None:
        status = self.status if self.status is not None else self.booking_status
        return status.strip().lower() if status else None

    @property
    def is_active(self) -> bool:
        return self.effective_status == ACTIVE_STATUS

    def occupies(self, floor_type: FloorType) -> bool:
        """True if this allocation is on the given floor. Unknown labels never match."""
        try:
            return FloorType.parse(self.floor_type) == floor_type
        except ValueError:
            return False


class AvailabilityResult(BaseModel):
    """
    Space availability for one floor type of one warehouse.

    Derived on every request, never stored.

    Example:
        {
            "total_space": 1000,
            "occupied_space": 300,
            "available_space": 700,
            "utilization_percentage": 30.0
        }
    """

    total_space: float = Field(..., ge=0, description="Capacity of the floor (m²)")
    occupied_space: float = Field(..., ge=0, description="Space held by active allocations (m²)")
    available_space: float = Field(..., ge=0, description="Free space, never negative (m²)")
    utilization_percentage: float = Field(..., ge=0, description="Occupied as a percentage of capacity")


class AvailabilityResponse(AvailabilityResult):
    """Availability result returned by GET /warehouses/{id}/availability."""

    warehouse_id: str
    space_type: FloorType


class WarehouseAvailability(BaseModel):
    """A warehouse with availability for each of its floors."""

    id: str
    name: str
    location: str | None = None
    has_mezzanine: bool = False
    ground: AvailabilityResult
    mezzanine: AvailabilityResult | None = Field(
        default=None,
        description="Null when the warehouse has no mezzanine"
    )


class WarehouseAvailabilityList(BaseModel):
    """Response of GET /warehouses/availability."""

    warehouses: list[WarehouseAvailability] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
