# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error tells the caller what failed and, where possible, how to fix it.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class LeasingAPIException(Exception):
    """
    Base exception for the Warehouse Leasing API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "LEASING_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Warehouse / Availability Exceptions
# =============================================================================

class WarehouseNotFoundError(LeasingAPIException):
    """Raised when a warehouse ID doesn't exist."""

    def __init__(self, warehouse_id: str):
        super().__init__(
            message=f"Warehouse not found: {warehouse_id}",
            code="WAREHOUSE_NOT_FOUND",
            status_code=404,
            suggestion="Check that the warehouse_id is correct",
            details={"warehouse_id": warehouse_id}
        )


class InvalidSpaceTypeError(LeasingAPIException):
    """Raised when a space type is not one of the known floor types."""

    def __init__(self, space_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid space type: {space_type!r}",
            code="INVALID_SPACE_TYPE",
            status_code=400,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"space_type": space_type, "allowed_types": allowed}
        )


class DataStoreUnavailableError(LeasingAPIException):
    """
    Raised when the database cannot be reached or a query fails.

    The underlying cause is logged, not returned. Requests are read-only,
    so callers may retry.
    """

    def __init__(self, operation: str):
        super().__init__(
            message="The data store is temporarily unavailable",
            code="DATA_STORE_UNAVAILABLE",
            status_code=500,
            suggestion="Retry the request in a few moments",
            details={"operation": operation}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidSessionError(LeasingAPIException):
    """Raised when a session token is missing, malformed or revoked."""

    def __init__(self, reason: str = "Invalid session"):
        super().__init__(
            message=reason,
            code="INVALID_SESSION",
            status_code=401,
            suggestion="Sign in again to obtain a new session token",
        )


class SessionExpiredError(LeasingAPIException):
    """Raised when a session has passed its expiry time."""

    def __init__(self):
        super().__init__(
            message="Session has expired",
            code="SESSION_EXPIRED",
            status_code=401,
            suggestion="Sign in again to obtain a new session token",
        )


class InsufficientRoleError(LeasingAPIException):
    """Raised when the user's role is below the role an endpoint requires."""

    def __init__(self, user_role: str, required_role: str):
        super().__init__(
            message=f"This action requires the {required_role} role",
            code="INSUFFICIENT_ROLE",
            status_code=403,
            suggestion="Ask an administrator to grant you a higher role",
            details={"role": user_role, "required_role": required_role}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def leasing_exception_handler(
    request: Request,
    exc: LeasingAPIException
) -> JSONResponse:
    """
    Convert LeasingAPIException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors (missing or malformed parameters).

    Bad input is a client error, reported as 400.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
