"""Cache keys for session read endpoints."""

import uuid

from django.conf import settings
from django.core.cache import cache

SESSION_LIST_KEY = "sessions:list"


def canonical_session_id(session_id: str) -> str:
    """Spell a session id the way the database returns it.

    UUIDs are lowercased and hyphenated so every spelling of one id shares a
    cache entry. Anything else is only stripped.
    """
    session_id = session_id.strip()
    try:
        return str(uuid.UUID(session_id))
    except ValueError:
        return session_id


def session_key(session_id: str) -> str:
    return f"sessions:{canonical_session_id(session_id)}"


def cache_timeout() -> int:
    return getattr(settings, "BOOKINGS_CACHE_TIMEOUT", 60)


def invalidate_session(session_id: str) -> None:
    cache.delete_many([SESSION_LIST_KEY, session_key(session_id)])
