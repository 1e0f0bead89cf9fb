# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for the current session.
#
# Note: Sign-in (the OAuth code exchange that creates a session) is handled
# outside this service. These routes inspect and end an existing session.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_bearer_token, get_current_user
from app.auth.models import LogoutResponse, SessionValidationResponse, UserResponse
from app.dependencies import SessionServiceDep
from core.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: User = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    return UserResponse.from_user(user)


@router.get("/validate-session", response_model=SessionValidationResponse)
async def validate_session(
    user: User = Depends(get_current_user)
) -> SessionValidationResponse:
    """
    Verify that the current session token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If the session is invalid, expired or the account is inactive
    """
    return SessionValidationResponse(valid=True, user=UserResponse.from_user(user))


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    sessions: SessionServiceDep,
    token: str = Depends(get_bearer_token),
) -> LogoutResponse:
    """
    End the current session.

    The session is deleted server-side, so the token stops working
    immediately. Logging out with an already-invalid token succeeds.
    """
    sessions.revoke_session(token)
    return LogoutResponse(success=True)
