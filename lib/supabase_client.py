# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for fetching:
# - Warehouses and their occupant allocations (availability)
# - Users (authentication)
# - Login sessions (server-side session store)
# - Pricing rates (mezzanine discount audit)
#
# Every method raises SupabaseClientError on failure. PostgREST's
# "no rows" response (PGRST116) is returned as None rather than raised.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   warehouse = SupabaseClient.fetch_warehouse(warehouse_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"

# Postgres code for a value that doesn't parse as the column type (e.g. a bad uuid)
INVALID_TEXT_CODE = "22P02"


def _error_code(error: Exception) -> str | None:
    """
    PostgREST error code of a failed query.

    postgrest.APIError carries it in .code; other exceptions only in
    their text, so fall back to matching the known codes there.
    """
    code = getattr(error, "code", None)
    if isinstance(code, str) and code:
        return code
    text = str(error)
    for known in (NO_ROWS_CODE, INVALID_TEXT_CODE):
        if known in text:
            return known
    return None


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an actionable suggestion alongside the message.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        warehouse = SupabaseClient.fetch_warehouse("550e8400-...")
        occupants = SupabaseClient.fetch_occupants(warehouse_id="550e8400-...")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Warehouses
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_warehouse(cls, warehouse_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a warehouse by ID.

        Args:
            warehouse_id: The warehouse UUID

        Returns:
            Warehouse dict with all columns, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        warehouse_id_str = normalize_uuid(warehouse_id)

        try:
            response = (
                client.table("warehouses")
                .select("*")
                .eq("id", warehouse_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            # An id that isn't a uuid can't match any row
            if _error_code(e) in (NO_ROWS_CODE, INVALID_TEXT_CODE):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch warehouse: {e}",
                code="FETCH_WAREHOUSE_FAILED",
                suggestion="Check that the warehouses table is accessible",
                details={"warehouse_id": warehouse_id_str}
            )

    @classmethod
    def fetch_warehouses(cls, status: str | None = "active") -> list[dict[str, Any]]:
        """
        Fetch warehouses ordered by name.

        Args:
            status: Only return warehouses with this status (None for all)

        Returns:
            List of warehouse dicts

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table("warehouses").select("*")
            if status:
                query = query.eq("status", status)
            response = query.order("name").execute()

            warehouses = response.data or []
            logger.debug(f"Fetched {len(warehouses)} warehouses (status={status})")
            return warehouses

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch warehouses: {e}",
                code="FETCH_WAREHOUSES_FAILED",
                suggestion="Check that the warehouses table is accessible",
                details={"status": status}
            )

    @classmethod
    def fetch_occupants(cls, warehouse_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch the occupant allocations of a warehouse.

        Floor and status filtering are left to the caller so that legacy
        rows (floor aliases, state kept in booking_status) are not lost.

        Args:
            warehouse_id: The warehouse UUID

        Returns:
            List of allocation dicts with keys:
            - id, warehouse_id, name
            - floor_type: "Ground Floor" or "Mezzanine"
            - space_occupied: Leased area (m²)
            - status, booking_status

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        warehouse_id_str = normalize_uuid(warehouse_id)

        try:
            response = (
                client.table("warehouse_occupants")
                .select("id, warehouse_id, name, floor_type, space_occupied, status, booking_status")
                .eq("warehouse_id", warehouse_id_str)
                .execute()
            )
            occupants = response.data or []
            logger.debug(f"Fetched {len(occupants)} occupants for warehouse {warehouse_id_str}")
            return occupants

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch warehouse occupants: {e}",
                code="FETCH_OCCUPANTS_FAILED",
                suggestion="Check that the warehouse_occupants table is accessible",
                details={"warehouse_id": warehouse_id_str}
            )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a user by ID.

        Returns:
            User dict (id, email, name, picture, role, is_active), or None

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("users")
                .select("id, email, name, picture, role, is_active")
                .eq("id", user_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if _error_code(e) == NO_ROWS_CODE:
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                details={"user_id": user_id_str}
            )

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_session(cls, session_token: str) -> dict[str, Any] | None:
        """
        Fetch a login session by its token.

        Returns:
            Session dict (session_token, user_id, created_at, expires_at), or None

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("user_sessions")
                .select("session_token, user_id, created_at, expires_at")
                .eq("session_token", session_token)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if _error_code(e) == NO_ROWS_CODE:
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch session: {e}",
                code="FETCH_SESSION_FAILED",
                suggestion="Check that the user_sessions table is accessible",
            )

    @classmethod
    def insert_session(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a login session.

        Args:
            data: Row with session_token, user_id, created_at, expires_at

        Returns:
            Inserted row

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("user_sessions")
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert session: {e}",
                code="INSERT_SESSION_FAILED",
                details={"user_id": str(data.get("user_id"))}
            )

    @classmethod
    def delete_session(cls, session_token: str) -> None:
        """
        Delete a login session. Deleting a missing session is not an error.

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            (
                client.table("user_sessions")
                .delete()
                .eq("session_token", session_token)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete session: {e}",
                code="DELETE_SESSION_FAILED",
            )

    @classmethod
    def delete_sessions_expiring_before(cls, cutoff_iso: str) -> int:
        """
        Delete every session whose expires_at is at or before cutoff_iso.

        Returns:
            Number of deleted rows

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("user_sessions")
                .delete()
                .lte("expires_at", cutoff_iso)
                .execute()
            )
            return len(response.data or [])
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to purge expired sessions: {e}",
                code="PURGE_SESSIONS_FAILED",
                details={"cutoff": cutoff_iso}
            )

    # -------------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_pricing_rates(cls) -> list[dict[str, Any]]:
        """
        Fetch all pricing rates ordered by space type, band and tenure.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("pricing_rates")
                .select("*")
                .order("space_type")
                .order("area_band_min")
                .order("tenure")
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch pricing rates: {e}",
                code="FETCH_PRICING_FAILED",
                suggestion="Check that the pricing_rates table is accessible",
            )

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> None:
        """
        Run a trivial query to check database connectivity.

        Raises:
            SupabaseClientError: If the database is unreachable
        """
        client = cls.get_client()
        try:
            client.table("warehouses").select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
            )
