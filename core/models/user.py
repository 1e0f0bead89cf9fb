# =============================================================================
# core/models/user.py - Users and Roles
# =============================================================================
# Roles form a strict hierarchy: ADMIN > MANAGER > SUPPORT > USER.
# A user holding a role is granted everything the roles below it are.
#
# Role checks are pure functions over the enum and always run server-side
# against the role stored in the users table.
# =============================================================================

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    """
    User roles, declared from least to most privileged.

    The declaration order is the hierarchy; see Role.rank.
    """
    USER = "USER"
    SUPPORT = "SUPPORT"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """
        Parse a role name (case-insensitive).

        Raises:
            ValueError: If the name is not a known role
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


_ROLE_ORDER: tuple[Role, ...] = tuple(Role)


def has_role(user_role: Role | str, required_role: Role | str) -> bool:
    """
    Check whether user_role grants required_role.

    Example:
        has_role(Role.MANAGER, Role.SUPPORT)  # True
        has_role(Role.SUPPORT, Role.MANAGER)  # False
    """
    return Role.parse(user_role).rank >= Role.parse(required_role).rank


def has_any_role(user_role: Role | str, required_roles: Iterable[Role | str]) -> bool:
    """Check whether user_role grants at least one of required_roles."""
    return any(has_role(user_role, role) for role in required_roles)


class User(BaseModel):
    """
    A row of the users table.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "ops@example.com",
            "name": "Ops Team",
            "role": "MANAGER",
            "is_active": true
        }
    """

    id: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None
    role: Role = Field(default=Role.USER)
    is_active: bool = True

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value)

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, value):
        return Role.USER if value is None else Role.parse(value)

    def has_role(self, required_role: Role | str) -> bool:
        return has_role(self.role, required_role)
