"""Session storage keyed by user identity."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from sales_bot.domain.sales import Session


class SessionStore(Protocol):
    """Key-value interface for conversation sessions."""

    def get(self, identity: str) -> Session:
        """Return the session for an identity, or a fresh one if absent."""

    def put(self, identity: str, session: Session) -> None:
        """Store a session, replacing any previous value."""

    def clear(self, identity: str) -> None:
        """Remove the session for an identity."""

    def snapshot(self) -> dict[str, Session]:
        """Return all live sessions."""


@dataclass
class _SessionEntry:
    session: Session
    expires_at: datetime | None


@dataclass
class InMemorySessionStore(SessionStore):
    """In-memory session store with optional idle expiry."""

    idle_timeout_seconds: int | None
    _entries: dict[str, _SessionEntry]

    def __init__(self, idle_timeout_seconds: int | None = None) -> None:
        self.idle_timeout_seconds = idle_timeout_seconds or None
        self._entries = {}

    def get(self, identity: str) -> Session:
        """Return the stored session unless it has been idle too long."""
        entry = self._entries.get(identity)
        if entry is None:
            return Session()
        if _is_expired(entry, datetime.now(tz=UTC)):
            self._entries.pop(identity, None)
            return Session()
        return entry.session

    def put(self, identity: str, session: Session) -> None:
        """Store a session and restart its idle timer."""
        expires_at = None
        if self.idle_timeout_seconds:
            expires_at = datetime.now(tz=UTC) + timedelta(
                seconds=self.idle_timeout_seconds
            )
        self._entries[identity] = _SessionEntry(session=session, expires_at=expires_at)

    def clear(self, identity: str) -> None:
        self._entries.pop(identity, None)

    def snapshot(self) -> dict[str, Session]:
        """Return live sessions, dropping expired ones."""
        now = datetime.now(tz=UTC)
        for identity in [
            key for key, entry in self._entries.items() if _is_expired(entry, now)
        ]:
            self._entries.pop(identity, None)
        return {identity: entry.session for identity, entry in self._entries.items()}


def _is_expired(entry: _SessionEntry, now: datetime) -> bool:
    return entry.expires_at is not None and now >= entry.expires_at
