"""Use-case for ending a login session."""

from __future__ import annotations

from portal.domain.users.repositories import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, session_id: str | None) -> None:
        if session_id:
            self._sessions.destroy(session_id)
