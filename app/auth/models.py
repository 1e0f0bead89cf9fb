# =============================================================================
# app/auth/models.py - Authentication Response Models
# =============================================================================

from pydantic import BaseModel

from core.models.user import Role, User


class UserResponse(BaseModel):
    """
    User profile returned by the auth endpoints.

    first_name/last_name are split from name for clients that
    display them separately.
    """
    id: str
    email: str | None = None
    name: str | None = None
    first_name: str = ""
    last_name: str = ""
    picture: str | None = None
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        parts = (user.name or "").split()
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            first_name=parts[0] if parts else "",
            last_name=" ".join(parts[1:]),
            picture=user.picture,
            role=user.role,
        )


class SessionValidationResponse(BaseModel):
    """Response of GET /auth/validate-session."""
    valid: bool
    user: UserResponse


class LogoutResponse(BaseModel):
    success: bool
