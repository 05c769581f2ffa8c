# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from threading import Lock

from portal.domain.users.entities import Session, SessionUser
from portal.shared.logging import logger

DEFAULT_TTL_SECONDS = 60 * 60 * 8


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemorySessionStore:
    """Process-local session store.

    Records live in a dict guarded by a lock and disappear on restart.
    Expired records are dropped lazily on lookup and in bulk whenever a
    new session is created or :meth:`purge_expired` runs.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._lock = Lock()
        self._sessions: dict[str, Session] = {}

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def create(self, username: str) -> str:
        now = self._clock()
        session = Session(
            session_id=secrets.token_urlsafe(32),
            user=SessionUser(username=username),
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            # Abandoned ids are never looked up again, so sweep them on every login.
            purged = self._evict_expired(now)
            self._sessions[session.session_id] = session
        if purged:
            logger.debug(f"sessions: purged {purged} expired")

        logger.info(
            f"sessions: created user={username} exp={session.expires_at.isoformat()} "
            f"sid={session.session_id[:6]}…"
        )
        return session.session_id

    def lookup(self, session_id: str) -> SessionUser | None:
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired(self._clock()):
                self._sessions.pop(session_id, None)
                logger.debug(f"sessions: expired sid={session_id[:6]}…")
                return None
            return session.user

    def destroy(self, session_id: str) -> None:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info(f"sessions: destroyed user={removed.user.username}")

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            purged = self._evict_expired(now)
        if purged:
            logger.debug(f"sessions: purged {purged} expired")
        return purged

    def _evict_expired(self, now: datetime) -> int:
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["DEFAULT_TTL_SECONDS", "InMemorySessionStore"]
