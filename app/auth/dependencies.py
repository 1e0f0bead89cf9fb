# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and role checks.
#
# Clients send the session token issued at sign-in:
#   Authorization: Bearer <token>
#
# Usage:
#   from app.auth import get_current_user, require_role
#
#   @router.get("/protected")
#   async def protected(user: User = Depends(get_current_user)):
#       return {"user_id": user.id}
#
#   @router.get("/managers-only")
#   async def managers(user: User = Depends(require_role(Role.MANAGER))):
#       ...
# =============================================================================

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.dependencies import SessionServiceDep
from app.exceptions import InsufficientRoleError, InvalidSessionError
from core.models.user import Role, User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header raises our structured 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Extract the Bearer token from the Authorization header.

    Raises:
        InvalidSessionError: 401 if the header is missing
    """
    if credentials is None or not credentials.credentials:
        raise InvalidSessionError("No session token")
    return credentials.credentials


async def get_current_user(
    sessions: SessionServiceDep,
    token: str = Depends(get_bearer_token),
) -> User:
    """
    Resolve the session token to the signed-in user.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the token and its server-side session (including expiry)
    3. Loads the user and rejects inactive accounts

    Raises:
        InvalidSessionError / SessionExpiredError: 401
    """
    user = sessions.validate_session(token)
    logger.debug(f"Authenticated user: {user.id} ({user.role.value})")
    return user


def require_role(required_role: Role) -> Callable:
    """
    Build a dependency that admits users holding required_role or higher.

    Raises (from the dependency):
        InsufficientRoleError: 403 if the user's role is too low
    """

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not user.has_role(required_role):
            logger.warning(
                f"User {user.id} with role {user.role.value} denied; "
                f"requires {required_role.value}"
            )
            raise InsufficientRoleError(user.role.value, required_role.value)
        return user

    return dependency
