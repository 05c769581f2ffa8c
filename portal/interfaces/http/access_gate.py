# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Path-based gate in front of every route handler.

Interior pages and the private part of the API need a live session. The
decision is made once per request from :class:`AccessPolicy`; handlers behind
the gate find the session owner in ``g.user``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from flask import Flask, g, redirect, request

from portal.domain.users.entities import SessionUser
from portal.domain.users.repositories import SessionStore
from portal.shared.errors import UnauthorizedError
from portal.shared.logging import logger

from .session_cookie import SessionCookie

LOGIN_PATH = "/login"
LANDING_PATH = "/inicio"


class Protection(str, Enum):
    PUBLIC = "public"
    PAGE = "page"
    API = "api"


@dataclass(slots=True, frozen=True)
class AccessPolicy:
    interior_prefixes: tuple[str, ...] = (LANDING_PATH,)
    api_prefix: str = "/api/"
    public_api: frozenset[str] = frozenset({"/api/login", "/api/logout", "/api/salud"})

    def classify(self, path: str) -> Protection:
        path = path.lower()
        for prefix in self.interior_prefixes:
            if path == prefix or path.startswith(prefix + "/"):
                return Protection.PAGE
        if path.startswith(self.api_prefix):
            if path.rstrip("/") in self.public_api:
                return Protection.PUBLIC
            return Protection.API
        return Protection.PUBLIC


class AccessGate:
    def __init__(
        self,
        *,
        sessions: SessionStore,
        cookie: SessionCookie,
        policy: AccessPolicy | None = None,
    ) -> None:
        self._sessions = sessions
        self._cookie = cookie
        self._policy = policy or AccessPolicy()

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    def current_user(self) -> SessionUser | None:
        session_id = self._cookie.read(request)
        if not session_id:
            return None
        return self._sessions.lookup(session_id)

    def enforce(self):
        protection = self._policy.classify(request.path)
        if protection is Protection.PUBLIC:
            return None

        user = self.current_user()
        if user is not None:
            g.user = user
            return None

        logger.warning(f"gate: no session on {request.method} {request.path} ({protection.value})")
        if protection is Protection.API:
            raise UnauthorizedError()
        return redirect(LOGIN_PATH)

    def install(self, app: Flask) -> None:
        app.before_request(self.enforce)


__all__ = ["LANDING_PATH", "LOGIN_PATH", "AccessGate", "AccessPolicy", "Protection"]
