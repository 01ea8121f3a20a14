"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from bookings.domain import Session, SessionId


class SessionStore(ABC):
    """Interface for session persistence operations."""

    @abstractmethod
    def list_sessions(self) -> list[Session]:
        """Return all sessions ordered by date ascending."""
        ...

    @abstractmethod
    def get_session(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def create_session(self, session: Session) -> SessionId:
        """Store a Draft session and return its newly assigned ID."""
        ...

    @abstractmethod
    def update_session(self, session_id: SessionId, fields: Mapping[str, Any]) -> None:
        """Overwrite the given domain fields of a stored session.

        Keys are Session attribute names. Writing ``slots`` replaces the whole
        slot list.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        ...

    @abstractmethod
    def delete_session(self, session_id: SessionId) -> None:
        """Remove a session and its slots.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        ...
