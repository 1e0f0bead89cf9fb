# =============================================================================
# core/services/session_store.py - Server-Side Session Storage
# =============================================================================
# SessionStore is the storage interface the SessionService works against.
# Two backends are provided:
# - SupabaseSessionStore: the user_sessions table (default)
# - InMemorySessionStore: a process-local dict (development and tests)
#
# Stores only persist records. Expiry is decided by SessionService, which
# always checks expires_at explicitly instead of trusting the backend.
# =============================================================================

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime

from lib.supabase_client import SupabaseClient
from core.models.session import SessionRecord

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Storage interface for login sessions."""

    @abstractmethod
    def save(self, record: SessionRecord) -> None:
        """Persist a new session."""

    @abstractmethod
    def get(self, session_id: str) -> SessionRecord | None:
        """Return the session, or None if it doesn't exist."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a session. Removing a missing session is a no-op."""

    @abstractmethod
    def purge_expired(self, now: datetime) -> int:
        """Remove every session expired at `now`. Returns how many were removed."""


class SupabaseSessionStore(SessionStore):
    """
    Sessions kept in the user_sessions table.

    Raises SupabaseClientError when the database call fails.
    """

    def save(self, record: SessionRecord) -> None:
        SupabaseClient.insert_session(record.to_db_row())

    def get(self, session_id: str) -> SessionRecord | None:
        row = SupabaseClient.fetch_session(session_id)
        return SessionRecord.from_db_row(row) if row else None

    def delete(self, session_id: str) -> None:
        SupabaseClient.delete_session(session_id)

    def purge_expired(self, now: datetime) -> int:
        removed = SupabaseClient.delete_sessions_expiring_before(now.isoformat())
        logger.info(f"Purged {removed} expired sessions")
        return removed


class InMemorySessionStore(SessionStore):
    """
    Sessions kept in a dict guarded by a lock.

    Sessions are lost on restart and not shared between processes.
    """

    def __init__(self):
        self._records: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: SessionRecord) -> None:
        with self._lock:
            self._records[record.session_id] = record

    def get(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            return self._records.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [sid for sid, record in self._records.items() if record.is_expired(now)]
            for sid in expired:
                del self._records[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def create_session_store(backend: str) -> SessionStore:
    """
    Build the session store for a backend name.

    Raises:
        ValueError: If the backend is unknown
    """
    if backend == "supabase":
        return SupabaseSessionStore()
    if backend == "memory":
        return InMemorySessionStore()
    raise ValueError(f"Unknown session backend: {backend}")
