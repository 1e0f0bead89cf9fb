# =============================================================================
# core/models/session.py - Login Session Schemas
# =============================================================================
# A session is created when a user signs in and lives until it expires or
# the user logs out. The record is kept server-side (see
# core/services/session_store.py); the client only holds a signed token
# that names the session.
# =============================================================================

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class SessionRecord(BaseModel):
    """
    Server-side session state.

    Stored as a row of user_sessions, where session_token holds
    session_id.
    """

    session_id: str = Field(..., description="Opaque session identifier")
    user_id: str = Field(..., description="Owner of the session")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime = Field(..., description="Instant after which the session is invalid")

    @field_validator("user_id", mode="before")
    @classmethod
    def _stringify_user_id(cls, value):
        return str(value)

    @field_validator("created_at", "expires_at")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Rows written without an offset are UTC
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now

    @classmethod
    def from_db_row(cls, row: dict) -> "SessionRecord":
        """Create a SessionRecord from a user_sessions row."""
        return cls(
            session_id=row["session_token"],
            user_id=row["user_id"],
            created_at=row.get("created_at") or datetime.now(timezone.utc),
            expires_at=row["expires_at"],
        )

    def to_db_row(self) -> dict:
        return {
            "session_token": self.session_id,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }


class IssuedSession(BaseModel):
    """A freshly created session and the bearer token for it."""

    token: str
    session_id: str
    user_id: str
    expires_at: datetime
