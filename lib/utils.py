# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        warehouse_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        warehouse_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
