# =============================================================================
# tests/test_availability.py - Availability Calculator Tests
# =============================================================================
# This module contains tests for:
# - calculate_availability on in-memory snapshots
# - AvailabilityService lookups and error mapping
#
# Tests use mocked Supabase responses to avoid database calls.
#
# Run with: poetry run pytest tests/test_availability.py -v
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import (
    DataStoreUnavailableError,
    InvalidSpaceTypeError,
    WarehouseNotFoundError,
)
from core.models.warehouse import FloorType, OccupantAllocation, Warehouse
from core.services.availability_service import AvailabilityService, calculate_availability
from lib.supabase_client import SupabaseClientError

from tests.conftest import WAREHOUSE_ID


def make_allocation(space, floor="Ground Floor", status="active", warehouse_id="w1", **kwargs):
    return OccupantAllocation(
        warehouse_id=warehouse_id,
        floor_type=floor,
        space_occupied=space,
        status=status,
        **kwargs,
    )


# =============================================================================
# calculate_availability Tests
# =============================================================================

class TestCalculateAvailability:
    """Test the pure availability calculation."""

    def test_single_active_allocation(self):
        """Test total 1000 with 300 occupied on the Ground Floor."""
        warehouse = Warehouse(id="w1", total_space=1000)

        result = calculate_availability(
            warehouse, [make_allocation(300)], FloorType.GROUND_FLOOR
        )

        assert result.total_space == 1000
        assert result.occupied_space == 300
        assert result.available_space == 700
        assert result.utilization_percentage == 30

    def test_allocations_are_summed(self):
        """Test two active allocations on the same floor."""
        warehouse = Warehouse(id="w1", total_space=1000)
        allocations = [make_allocation(200), make_allocation(150)]

        result = calculate_availability(warehouse, allocations, FloorType.GROUND_FLOOR)

        assert result.occupied_space == 350
        assert result.available_space == 650

    def test_over_allocation_clamps_available_to_zero(self):
        """Test that occupied > total never yields negative availability."""
        warehouse = Warehouse(id="w1", total_space=100)

        result = calculate_availability(
            warehouse, [make_allocation(150)], FloorType.GROUND_FLOOR
        )

        assert result.occupied_space == 150
        assert result.available_space == 0
        assert result.utilization_percentage == 150

    def test_no_mezzanine_means_zero_capacity(self):
        """Test Mezzanine on a warehouse without one."""
        warehouse = Warehouse(id="w1", total_space=1000, has_mezzanine=False, mezzanine_space=500)

        result = calculate_availability(warehouse, [], FloorType.MEZZANINE)

        assert result.total_space == 0
        assert result.available_space == 0
        assert result.utilization_percentage == 0

    def test_zero_total_gives_zero_utilization(self):
        """Test that utilization doesn't divide by zero."""
        warehouse = Warehouse(id="w1", total_space=0)

        result = calculate_availability(
            warehouse, [make_allocation(50)], FloorType.GROUND_FLOOR
        )

        assert result.utilization_percentage == 0
        assert result.available_space == 0

    @pytest.mark.parametrize("status", ["completed", "pending", "cancelled", None])
    def test_inactive_allocations_are_ignored(self, status):
        """Test that only active allocations count."""
        warehouse = Warehouse(id="w1", total_space=1000)
        allocations = [make_allocation(300), make_allocation(400, status=status)]

        result = calculate_availability(warehouse, allocations, FloorType.GROUND_FLOOR)

        assert result.occupied_space == 300

    def test_booking_status_fallback(self):
        """Test legacy rows whose state lives in booking_status."""
        warehouse = Warehouse(id="w1", total_space=1000)
        allocations = [
            make_allocation(250, status=None, booking_status="Active"),
            make_allocation(100, status=None, booking_status="completed"),
        ]

        result = calculate_availability(warehouse, allocations, FloorType.GROUND_FLOOR)

        assert result.occupied_space == 250

    def test_other_floor_and_warehouse_ignored(self):
        """Test that allocations elsewhere don't count."""
        warehouse = Warehouse(id="w1", total_space=1000, has_mezzanine=True, mezzanine_space=400)
        allocations = [
            make_allocation(100),
            make_allocation(80, floor="Mezzanine"),
            make_allocation(500, warehouse_id="w2"),
            make_allocation(60, floor="Roof"),
        ]

        ground = calculate_availability(warehouse, allocations, FloorType.GROUND_FLOOR)
        mezzanine = calculate_availability(warehouse, allocations, FloorType.MEZZANINE)

        assert ground.occupied_space == 100
        assert mezzanine.occupied_space == 80
        assert mezzanine.available_space == 320
        assert mezzanine.utilization_percentage == 20

    def test_floor_aliases_match(self):
        """Test that floor labels are matched case-insensitively."""
        warehouse = Warehouse(id="w1", total_space=1000, has_mezzanine=True, mezzanine_space=400)
        allocations = [make_allocation(40, floor="mezzanine"), make_allocation(10, floor=" Mezz ")]

        result = calculate_availability(warehouse, allocations, FloorType.MEZZANINE)

        assert result.occupied_space == 50

    def test_available_never_negative(self):
        """Test the clamp across a range of occupancies."""
        warehouse = Warehouse(id="w1", total_space=500)

        for occupied in (0, 250, 500, 501, 10_000):
            result = calculate_availability(
                warehouse, [make_allocation(occupied)], FloorType.GROUND_FLOOR
            )
            assert result.available_space == max(500 - occupied, 0)


# =============================================================================
# AvailabilityService Tests
# =============================================================================

class TestComputeAvailability:
    """Test AvailabilityService.compute_availability with mocked Supabase."""

    @patch("core.services.availability_service.SupabaseClient")
    def test_ground_floor(self, mock_client, warehouse_row, occupant_rows):
        """Test Ground Floor availability from database rows."""
        mock_client.fetch_warehouse.return_value = warehouse_row
        mock_client.fetch_occupants.return_value = occupant_rows

        result = AvailabilityService.compute_availability(WAREHOUSE_ID, "Ground Floor")

        assert result.warehouse_id == WAREHOUSE_ID
        assert result.space_type == FloorType.GROUND_FLOOR
        assert result.total_space == 1000
        assert result.occupied_space == 300
        assert result.available_space == 700
        assert result.utilization_percentage == 30
        mock_client.fetch_occupants.assert_called_once_with(WAREHOUSE_ID)

    @patch("core.services.availability_service.SupabaseClient")
    def test_mezzanine(self, mock_client, warehouse_row, occupant_rows):
        """Test Mezzanine availability with a string-typed numeric column."""
        mock_client.fetch_warehouse.return_value = warehouse_row
        mock_client.fetch_occupants.return_value = occupant_rows

        result = AvailabilityService.compute_availability(WAREHOUSE_ID, "Mezzanine")

        assert result.total_space == 400
        assert result.occupied_space == 150.5
        assert result.available_space == 249.5

    @patch("core.services.availability_service.SupabaseClient")
    def test_mezzanine_without_mezzanine_skips_occupants(self, mock_client, warehouse_row):
        """Test that a missing mezzanine short-circuits to zero."""
        warehouse_row["has_mezzanine"] = False
        mock_client.fetch_warehouse.return_value = warehouse_row

        result = AvailabilityService.compute_availability(WAREHOUSE_ID, "Mezzanine")

        assert result.total_space == 0
        assert result.available_space == 0
        assert result.utilization_percentage == 0
        mock_client.fetch_occupants.assert_not_called()

    @patch("core.services.availability_service.SupabaseClient")
    def test_malformed_rows_are_skipped(self, mock_client, warehouse_row):
        """Test that a row missing warehouse_id doesn't fail the request."""
        mock_client.fetch_warehouse.return_value = warehouse_row
        mock_client.fetch_occupants.return_value = [
            {"id": "bad", "floor_type": "Ground Floor", "space_occupied": 999, "status": "active"},
            {"id": "ok", "warehouse_id": WAREHOUSE_ID, "floor_type": "Ground Floor",
             "space_occupied": 100, "status": "active"},
        ]

        result = AvailabilityService.compute_availability(WAREHOUSE_ID, "Ground Floor")

        assert result.occupied_space == 100

    @patch("core.services.availability_service.SupabaseClient")
    def test_unknown_warehouse(self, mock_client):
        """Test WarehouseNotFoundError for a missing warehouse."""
        mock_client.fetch_warehouse.return_value = None

        with pytest.raises(WarehouseNotFoundError) as exc_info:
            AvailabilityService.compute_availability("missing", "Ground Floor")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"warehouse_id": "missing"}

    @pytest.mark.parametrize("space_type", ["Roof", "", None])
    @patch("core.services.availability_service.SupabaseClient")
    def test_invalid_space_type(self, mock_client, space_type):
        """Test that the floor type is validated before any lookup."""
        with pytest.raises(InvalidSpaceTypeError) as exc_info:
            AvailabilityService.compute_availability(WAREHOUSE_ID, space_type)

        assert exc_info.value.status_code == 400
        mock_client.fetch_warehouse.assert_not_called()

    @patch("core.services.availability_service.SupabaseClient")
    def test_warehouse_lookup_failure(self, mock_client):
        """Test that a database failure becomes DataStoreUnavailableError."""
        mock_client.fetch_warehouse.side_effect = SupabaseClientError("connection refused")

        with pytest.raises(DataStoreUnavailableError) as exc_info:
            AvailabilityService.compute_availability(WAREHOUSE_ID, "Ground Floor")

        assert exc_info.value.code == "DATA_STORE_UNAVAILABLE"
        # The cause is not leaked to the caller
        assert "connection refused" not in exc_info.value.message

    @patch("core.services.availability_service.SupabaseClient")
    def test_occupant_lookup_failure(self, mock_client, warehouse_row):
        """Test failure of the occupant query."""
        mock_client.fetch_warehouse.return_value = warehouse_row
        mock_client.fetch_occupants.side_effect = SupabaseClientError("timeout")

        with pytest.raises(DataStoreUnavailableError):
            AvailabilityService.compute_availability(WAREHOUSE_ID, "Ground Floor")


class TestListWarehouseAvailability:
    """Test the all-warehouses availability view."""

    @patch("core.services.availability_service.SupabaseClient")
    def test_both_floors(self, mock_client, warehouse_row, occupant_rows):
        """Test that each warehouse carries ground and mezzanine results."""
        no_mezz = {
            "id": "w2", "name": "Hidd Store", "total_space": 500,
            "has_mezzanine": False, "mezzanine_space": None,
        }
        mock_client.fetch_warehouses.return_value = [no_mezz, warehouse_row]
        mock_client.fetch_occupants.side_effect = [[], occupant_rows]

        warehouses = AvailabilityService.list_warehouse_availability()

        assert [w.id for w in warehouses] == ["w2", WAREHOUSE_ID]
        assert warehouses[0].ground.available_space == 500
        assert warehouses[0].mezzanine is None
        assert warehouses[1].ground.occupied_space == 300
        assert warehouses[1].mezzanine.occupied_space == 150.5
        mock_client.fetch_warehouses.assert_called_once_with(status="active")
        assert mock_client.fetch_occupants.call_count == 2

    @patch("core.services.availability_service.SupabaseClient")
    def test_malformed_warehouse_rows_are_skipped(self, mock_client, warehouse_row):
        """Test that one bad warehouse row doesn't fail the whole list."""
        mock_client.fetch_warehouses.return_value = [{"name": "No ID"}, warehouse_row]
        mock_client.fetch_occupants.return_value = []

        warehouses = AvailabilityService.list_warehouse_availability()

        assert [w.id for w in warehouses] == [WAREHOUSE_ID]
        mock_client.fetch_occupants.assert_called_once_with(WAREHOUSE_ID)

    @patch("core.services.availability_service.SupabaseClient")
    def test_list_failure(self, mock_client):
        """Test failure of the warehouse query."""
        mock_client.fetch_warehouses.side_effect = SupabaseClientError("down")

        with pytest.raises(DataStoreUnavailableError):
            AvailabilityService.list_warehouse_availability()
