# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request, Response
from itsdangerous import BadSignature, Signer

from portal.shared.config import AppConfig
from portal.shared.logging import logger


class SessionCookie:
    """Carries the opaque session id to the browser, signed with the session secret."""

    def __init__(
        self,
        *,
        name: str,
        secret: str,
        max_age: int,
        secure: bool = False,
        samesite: str = "Lax",
    ) -> None:
        self.name = name
        self._signer = Signer(secret, salt="portal.session")
        self._max_age = max_age
        self._secure = secure
        self._samesite = samesite

    @classmethod
    def from_config(cls, config: AppConfig) -> "SessionCookie":
        return cls(
            name=config.session.cookie_name,
            secret=config.session.secret,
            max_age=config.session.ttl_seconds,
            secure=config.secure_cookies(),
            samesite=config.security.cookie_samesite,
        )

    def read(self, req: Request) -> str | None:
        raw = req.cookies.get(self.name, "")
        if not raw:
            return None
        try:
            return self._signer.unsign(raw).decode("utf-8")
        except BadSignature:
            logger.warning(f"Rejected session cookie with bad signature on {req.method} {req.path}")
            return None

    def attach(self, resp: Response, session_id: str) -> Response:
        resp.set_cookie(
            self.name,
            self._signer.sign(session_id).decode("utf-8"),
            max_age=self._max_age,
            httponly=True,
            secure=self._secure,
            samesite=self._samesite,
        )
        return resp

    def clear(self, resp: Response) -> Response:
        resp.delete_cookie(
            self.name,
            httponly=True,
            secure=self._secure,
            samesite=self._samesite,
        )
        return resp


__all__ = ["SessionCookie"]
