# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from pathlib import Path

from flask import Blueprint, Response, g, jsonify, redirect, send_from_directory

from portal.domain.users.entities import SessionUser
from portal.interfaces.http.access_gate import LANDING_PATH, LOGIN_PATH
from portal.interfaces.http.dto.auth import MeResponseDTO, UserDTO
from portal.shared.errors import UnauthorizedError
from portal.shared.middleware.security_headers import apply_no_store


def _session_user() -> SessionUser | None:
    return getattr(g, "user", None)


class PagesController:
    def __init__(self, *, views_dir: Path) -> None:
        self._views_dir = views_dir

    def landing(self) -> Response:
        if _session_user() is None:
            return redirect(LOGIN_PATH)
        response = send_from_directory(self._views_dir, "inicio.html")
        # Back/forward navigation must not replay the page after logout.
        return apply_no_store(response)

    def landing_file(self) -> Response:
        return redirect(LANDING_PATH)

    def me(self) -> Response:
        user = _session_user()
        if user is None:
            raise UnauthorizedError()
        payload = MeResponseDTO(user=UserDTO(username=user.username))
        return jsonify(payload.model_dump())

    def data(self) -> Response:
        if _session_user() is None:
            raise UnauthorizedError()
        return jsonify({"ok": True, "msg": "Solo con sesión", "ts": int(time.time() * 1000)})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("pages", __name__)
        bp.add_url_rule(LANDING_PATH, view_func=self.landing, methods=["GET"])
        bp.add_url_rule("/inicio.html", view_func=self.landing_file, methods=["GET"])
        bp.add_url_rule("/api/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/api/datos", view_func=self.data, methods=["GET"])
        return bp
