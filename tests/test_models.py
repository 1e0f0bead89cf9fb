# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the models to ensure:
# - Database rows are parsed and coerced correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    AvailabilityResult,
    FloorType,
    OccupantAllocation,
    PricingRate,
    SessionRecord,
    User,
    Warehouse,
)


# =============================================================================
# FloorType Tests
# =============================================================================

class TestFloorType:
    """Tests for FloorType parsing."""

    @pytest.mark.parametrize("label, expected", [
        ("Ground Floor", FloorType.GROUND_FLOOR),
        ("ground floor", FloorType.GROUND_FLOOR),
        ("  GROUND_FLOOR ", FloorType.GROUND_FLOOR),
        ("ground", FloorType.GROUND_FLOOR),
        ("Mezzanine", FloorType.MEZZANINE),
        ("mezz", FloorType.MEZZANINE),
        (FloorType.MEZZANINE, FloorType.MEZZANINE),
    ])
    def test_parse(self, label, expected):
        """Test accepted labels."""
        assert FloorType.parse(label) == expected

    @pytest.mark.parametrize("label", ["Roof", "", "Ground Floor 2", None])
    def test_parse_rejects_unknown(self, label):
        """Test that unknown labels raise ValueError."""
        with pytest.raises(ValueError):
            FloorType.parse(label)

    def test_labels(self):
        """Test the canonical labels."""
        assert FloorType.labels() == ["Ground Floor", "Mezzanine"]


# =============================================================================
# Warehouse Tests
# =============================================================================

class TestWarehouse:
    """Tests for Warehouse model."""

    def test_from_row(self, warehouse_row):
        """Test creating a Warehouse from a database row."""
        warehouse = Warehouse.model_validate(warehouse_row)

        assert warehouse.name == "Sitra Warehouse A"
        assert warehouse.total_space == 1000.0
        assert warehouse.has_mezzanine is True
        assert warehouse.mezzanine_space == 400.0

    def test_uuid_id_is_stringified(self):
        """Test that UUID ids become strings."""
        warehouse_id = uuid4()
        warehouse = Warehouse(id=warehouse_id)

        assert warehouse.id == str(warehouse_id)

    @pytest.mark.parametrize("raw, expected", [
        (None, 0.0),
        ("", 0.0),
        ("1250.5", 1250.5),
        ("n/a", 0.0),
        (-10, 0.0),
    ])
    def test_space_coercion(self, raw, expected):
        """Test that numeric columns tolerate nulls, strings and garbage."""
        warehouse = Warehouse(id="w1", total_space=raw)

        assert warehouse.total_space == expected

    def test_null_name_and_status(self):
        """Test nullable text columns."""
        warehouse = Warehouse(id="w1", name=None, status=None)

        assert warehouse.name == ""
        assert warehouse.status is None

    @pytest.mark.parametrize("raw, expected", [
        (True, True), (False, False), (None, False),
        ("true", True), ("false", False), ("0", False),
    ])
    def test_has_mezzanine_coercion(self, raw, expected):
        """Test the has_mezzanine flag from various column encodings."""
        assert Warehouse(id="w1", has_mezzanine=raw).has_mezzanine is expected

    def test_capacity_for(self):
        """Test capacity per floor type."""
        with_mezz = Warehouse(id="w1", total_space=1000, has_mezzanine=True, mezzanine_space=300)
        without_mezz = Warehouse(id="w2", total_space=800, has_mezzanine=False, mezzanine_space=300)

        assert with_mezz.capacity_for(FloorType.GROUND_FLOOR) == 1000
        assert with_mezz.capacity_for(FloorType.MEZZANINE) == 300
        assert without_mezz.capacity_for(FloorType.MEZZANINE) == 0

    def test_extra_columns_ignored(self):
        """Test that unrelated columns don't break parsing."""
        warehouse = Warehouse.model_validate({"id": "w1", "owner": "x", "created_at": "2024-01-01"})

        assert warehouse.id == "w1"

    def test_missing_id_fails(self):
        """Test that id is required."""
        with pytest.raises(ValidationError):
            Warehouse.model_validate({"name": "No ID"})


# =============================================================================
# OccupantAllocation Tests
# =============================================================================

class TestOccupantAllocation:
    """Tests for OccupantAllocation model."""

    @pytest.mark.parametrize("status, booking_status, active", [
        ("active", None, True),
        ("ACTIVE ", None, True),
        (None, "active", True),
        ("completed", "active", False),
        ("pending", None, False),
        (None, None, False),
    ])
    def test_is_active(self, status, booking_status, active):
        """Test status with booking_status fallback."""
        allocation = OccupantAllocation(
            warehouse_id="w1", status=status, booking_status=booking_status
        )

        assert allocation.is_active is active

    def test_occupies(self):
        """Test floor matching."""
        allocation = OccupantAllocation(warehouse_id="w1", floor_type="Mezzanine")

        assert allocation.occupies(FloorType.MEZZANINE)
        assert not allocation.occupies(FloorType.GROUND_FLOOR)

    def test_unknown_floor_never_matches(self):
        """Test that null or unknown floor labels match nothing."""
        for floor in (None, "Roof"):
            allocation = OccupantAllocation(warehouse_id="w1", floor_type=floor)
            assert not allocation.occupies(FloorType.GROUND_FLOOR)
            assert not allocation.occupies(FloorType.MEZZANINE)

    def test_space_coercion(self):
        """Test that space_occupied is coerced and clamped."""
        assert OccupantAllocation(warehouse_id="w1", space_occupied="75.25").space_occupied == 75.25
        assert OccupantAllocation(warehouse_id="w1", space_occupied=None).space_occupied == 0
        assert OccupantAllocation(warehouse_id="w1", space_occupied=-5).space_occupied == 0


# =============================================================================
# AvailabilityResult Tests
# =============================================================================

class TestAvailabilityResult:
    """Tests for AvailabilityResult model."""

    def test_negative_values_rejected(self):
        """Test that available space can't be negative."""
        with pytest.raises(ValidationError):
            AvailabilityResult(
                total_space=100,
                occupied_space=150,
                available_space=-50,
                utilization_percentage=150,
            )


# =============================================================================
# User / Session / Pricing Model Tests
# =============================================================================

class TestUser:
    """Tests for User model."""

    def test_from_row(self, user_row):
        """Test creating a User from a database row."""
        user = User.model_validate(user_row)

        assert user.role.value == "MANAGER"
        assert user.is_active is True

    def test_role_defaults(self):
        """Test that a null role means USER."""
        assert User(id="u1", role=None).role.value == "USER"
        assert User(id="u1", role="admin").role.value == "ADMIN"

    def test_unknown_role_rejected(self):
        """Test that unknown roles fail validation."""
        with pytest.raises(ValidationError):
            User(id="u1", role="SUPERUSER")


class TestSessionRecord:
    """Tests for SessionRecord model."""

    def test_db_row_round_trip(self):
        """Test conversion to and from a user_sessions row."""
        now = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        record = SessionRecord(
            session_id="sid-1",
            user_id="u1",
            created_at=now,
            expires_at=now + timedelta(hours=24),
        )

        row = record.to_db_row()
        assert row["session_token"] == "sid-1"

        assert SessionRecord.from_db_row(row) == record

    def test_naive_timestamps_are_utc(self):
        """Test that timestamps without an offset are read as UTC."""
        record = SessionRecord.from_db_row({
            "session_token": "sid-1",
            "user_id": "u1",
            "created_at": "2024-01-15T10:00:00",
            "expires_at": "2024-01-16T10:00:00",
        })

        assert record.expires_at.tzinfo is not None
        assert record.expires_at == datetime(2024, 1, 16, 10, 0, tzinfo=timezone.utc)

    def test_is_expired(self):
        """Test the expiry boundary."""
        expires = datetime(2024, 1, 16, 10, 0, tzinfo=timezone.utc)
        record = SessionRecord(session_id="s", user_id="u", expires_at=expires)

        assert not record.is_expired(expires - timedelta(seconds=1))
        assert record.is_expired(expires)


class TestPricingRate:
    """Tests for PricingRate model."""

    def test_band_key(self):
        """Test the pairing key."""
        rate = PricingRate(
            space_type="Ground Floor",
            tenure="Long",
            area_band_name="0-500",
            monthly_rate_per_sqm=3.5,
        )

        assert rate.band_key == ("0-500", "Long")
        assert PricingRate(space_type="Mezzanine", tenure="Short", monthly_rate_per_sqm=1).band_key == ("", "Short")
