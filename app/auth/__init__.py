# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Session-token authentication and role checks.
#
# Usage:
#   from app.auth import get_current_user, require_role
#
#   @router.get("/protected")
#   async def protected(user: User = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_bearer_token, get_current_user, require_role
from app.auth.models import UserResponse

__all__ = [
    "get_bearer_token",
    "get_current_user",
    "require_role",
    "UserResponse",
]
