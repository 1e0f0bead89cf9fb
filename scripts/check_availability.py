#!/usr/bin/env python3
# =============================================================================
# scripts/check_availability.py - Print Warehouse Availability
# =============================================================================
# Prints Ground Floor and Mezzanine availability of every active warehouse,
# computed by the same service the API uses.
#
# Usage:
#   poetry run python scripts/check_availability.py
#   poetry run python scripts/check_availability.py --warehouse <id> --space-type Mezzanine
#
# Prerequisites:
#   - Environment variables must be set (.env file)
# =============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.exceptions import LeasingAPIException
from core.models.warehouse import AvailabilityResult
from core.services.availability_service import AvailabilityService


def format_result(label: str, result: AvailabilityResult | None) -> str:
    if result is None:
        return f"  {label:<13} -"
    return (
        f"  {label:<13} {result.available_space:>10,.1f} / {result.total_space:>10,.1f} m² free"
        f"  ({result.utilization_percentage:.1f}% used)"
    )


def print_all():
    warehouses = AvailabilityService.list_warehouse_availability()

    print("=" * 60)
    print(f"Active warehouses: {len(warehouses)}")
    print("=" * 60)

    for warehouse in warehouses:
        location = f" ({warehouse.location})" if warehouse.location else ""
        print(f"\n{warehouse.name}{location} [{warehouse.id}]")
        print(format_result("Ground Floor", warehouse.ground))
        print(format_result("Mezzanine", warehouse.mezzanine))


def print_one(warehouse_id: str, space_type: str):
    result = AvailabilityService.compute_availability(warehouse_id, space_type)
    print(f"Warehouse {result.warehouse_id}")
    print(format_result(result.space_type.value, result))
    print(f"  Occupied: {result.occupied_space:,.1f} m²")


def main():
    parser = argparse.ArgumentParser(description="Print warehouse space availability")
    parser.add_argument("--warehouse", help="Only this warehouse ID")
    parser.add_argument("--space-type", default="Ground Floor", help="Floor type for --warehouse")
    args = parser.parse_args()

    try:
        if args.warehouse:
            print_one(args.warehouse, args.space_type)
        else:
            print_all()
    except LeasingAPIException as e:
        print(f"Error [{e.code}]: {e.message}")
        if e.suggestion:
            print(f"Suggestion: {e.suggestion}")
        sys.exit(1)


if __name__ == "__main__":
    main()
