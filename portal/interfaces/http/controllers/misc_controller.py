# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, make_response, redirect

from portal.interfaces.http.access_gate import LOGIN_PATH


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.root, methods=["GET"])
        bp.add_url_rule("/salud", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/api/salud", endpoint="api_health", view_func=self.health, methods=["GET"])
        return bp

    def root(self) -> Response:
        return redirect(LOGIN_PATH)

    def health(self) -> Response:
        response = make_response("ok", 200)
        response.mimetype = "text/plain"
        return response
