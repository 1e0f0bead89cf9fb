# =============================================================================
# core/services/session_service.py - Login Session Business Logic
# =============================================================================
# Creates, validates and revokes login sessions.
#
# The client holds an HS256 JWT signed with SECRET_KEY:
#   {"sub": <user id>, "sid": <session id>, "iat": ..., "exp": ...}
# The signature proves the token was issued here; the stored SessionRecord
# is what makes it valid, so deleting the record (logout) revokes it even
# before "exp".
# =============================================================================

import logging
import secrets
from datetime import timedelta

from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.exceptions import (
    DataStoreUnavailableError,
    InvalidSessionError,
    SessionExpiredError,
)
from core.models.session import IssuedSession, SessionRecord
from core.models.user import User
from core.services.session_store import SessionStore, create_session_store
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import utc_now

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


class SessionService:
    """
    Service for login session operations.

    Works against any SessionStore; the default is chosen by
    settings.SESSION_BACKEND.
    """

    def __init__(
        self,
        store: SessionStore,
        secret_key: str | None = None,
        ttl: timedelta | None = None,
    ):
        self.store = store
        self.secret_key = secret_key or settings.SECRET_KEY
        self.ttl = ttl or timedelta(seconds=settings.session_ttl_seconds)

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def _encode_token(self, record: SessionRecord) -> str:
        claims = {
            "sub": record.user_id,
            "sid": record.session_id,
            "iat": int(record.created_at.timestamp()),
            "exp": int(record.expires_at.timestamp()),
        }
        return jwt.encode(claims, self.secret_key, algorithm=TOKEN_ALGORITHM)

    def _decode_token(self, token: str) -> dict:
        """
        Verify a token's signature and expiry.

        Raises:
            SessionExpiredError: If "exp" has passed
            InvalidSessionError: If the token is malformed or forged
        """
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[TOKEN_ALGORITHM])
        except ExpiredSignatureError:
            logger.info("Session token has expired")
            raise SessionExpiredError()
        except JWTError as e:
            logger.warning(f"Session token validation failed: {e}")
            raise InvalidSessionError("Invalid session token")

        if not claims.get("sid") or not claims.get("sub"):
            logger.warning("Session token missing 'sid' or 'sub' claim")
            raise InvalidSessionError("Invalid session token")

        return claims

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def create_session(self, user_id: str) -> IssuedSession:
        """
        Start a session for a user.

        Args:
            user_id: The user's ID

        Returns:
            IssuedSession with the bearer token and expiry

        Raises:
            DataStoreUnavailableError: If the session can't be stored
        """
        now = utc_now()
        record = SessionRecord(
            session_id=secrets.token_urlsafe(32),
            user_id=str(user_id),
            created_at=now,
            expires_at=now + self.ttl,
        )

        try:
            self.store.save(record)
        except SupabaseClientError as e:
            logger.error(f"Failed to store session for user {user_id}: {e}")
            raise DataStoreUnavailableError("save_session") from e

        logger.info(f"Created session for user {user_id}, expires {record.expires_at.isoformat()}")

        return IssuedSession(
            token=self._encode_token(record),
            session_id=record.session_id,
            user_id=record.user_id,
            expires_at=record.expires_at,
        )

    def validate_session(self, token: str) -> User:
        """
        Resolve a bearer token to an active user.

        Checks, in order: token signature and "exp", that the session is
        still stored, that the stored session hasn't expired (expired
        records are deleted), and that the user exists and is active.

        Raises:
            InvalidSessionError: If any check fails
            SessionExpiredError: If the token or stored session has expired
            DataStoreUnavailableError: If the store or users table fails
        """
        claims = self._decode_token(token)
        session_id = claims["sid"]

        try:
            record = self.store.get(session_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to load session: {e}")
            raise DataStoreUnavailableError("get_session") from e

        if record is None:
            raise InvalidSessionError("Session not found or revoked")

        if record.user_id != str(claims["sub"]):
            logger.warning(f"Session {session_id[:8]}... does not belong to token subject")
            raise InvalidSessionError("Invalid session token")

        if record.is_expired(utc_now()):
            logger.info(f"Session {session_id[:8]}... expired at {record.expires_at.isoformat()}")
            try:
                self.store.delete(session_id)
            except SupabaseClientError as e:
                logger.warning(f"Failed to delete expired session: {e}")
            raise SessionExpiredError()

        try:
            row = SupabaseClient.fetch_user(record.user_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to load user {record.user_id}: {e}")
            raise DataStoreUnavailableError("fetch_user") from e

        if not row:
            raise InvalidSessionError("User no longer exists")

        user = User.model_validate(row)
        if not user.is_active:
            raise InvalidSessionError("Account not active")

        return user

    def revoke_session(self, token: str) -> bool:
        """
        End a session (logout).

        Idempotent: unknown, expired or malformed tokens are ignored.

        Returns:
            True if a session id could be read from the token
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[TOKEN_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            return False

        session_id = claims.get("sid")
        if not session_id:
            return False

        try:
            self.store.delete(session_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to delete session: {e}")
            raise DataStoreUnavailableError("delete_session") from e

        logger.info(f"Revoked session for user {claims.get('sub')}")
        return True

    def purge_expired_sessions(self) -> int:
        """Delete every expired session from the store."""
        try:
            return self.store.purge_expired(utc_now())
        except SupabaseClientError as e:
            logger.error(f"Failed to purge expired sessions: {e}")
            raise DataStoreUnavailableError("purge_sessions") from e


_session_service: SessionService | None = None


def get_session_service() -> SessionService:
    """Get the process-wide SessionService, creating it on first use."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService(create_session_store(settings.SESSION_BACKEND))
    return _session_service
