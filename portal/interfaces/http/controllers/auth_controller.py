# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from pathlib import Path

from flask import Blueprint, Response, jsonify, make_response, redirect, request, send_from_directory

from portal.application.use_cases.users.login_user import LoginUserUseCase
from portal.application.use_cases.users.logout_user import LogoutUserUseCase
from portal.domain.users.exceptions import InvalidCredentialsError
from portal.interfaces.http.access_gate import LANDING_PATH, LOGIN_PATH
from portal.interfaces.http.dto.auth import LoginFailureDTO, LoginRequestDTO, LoginSuccessDTO
from portal.interfaces.http.session_cookie import SessionCookie
from portal.shared.logging import logger

INVALID_CREDENTIALS_MESSAGE = "Usuario o contraseña incorrectos"
INVALID_CREDENTIALS_HTML = (
    '<meta charset="utf-8">\n'
    '<p>Credenciales inválidas. <a href="/login">Volver</a></p>\n'
)


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _read_credentials() -> LoginRequestDTO:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    return LoginRequestDTO.from_payload(payload)


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        cookie: SessionCookie,
        public_dir: Path,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._cookie = cookie
        self._public_dir = public_dir

    def _authenticate(self, dto: LoginRequestDTO) -> str | None:
        try:
            session_id = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            logger.warning(
                f"auth.login: invalid credentials username='{dto.username}' ip={_get_client_ip()}"
            )
            return None
        logger.info(f"auth.login: ok username={dto.username} ip={_get_client_ip()}")
        return session_id

    def login_page(self) -> Response:
        return send_from_directory(self._public_dir, "login.html")

    def login_form(self) -> Response | tuple[Response, int]:
        session_id = self._authenticate(_read_credentials())
        if session_id is None:
            response = make_response(INVALID_CREDENTIALS_HTML, HTTPStatus.UNAUTHORIZED)
            response.mimetype = "text/html"
            return response

        response = redirect(LANDING_PATH)
        return self._cookie.attach(response, session_id)

    def login_api(self) -> tuple[Response, int]:
        session_id = self._authenticate(_read_credentials())
        if session_id is None:
            payload = LoginFailureDTO(error=INVALID_CREDENTIALS_MESSAGE).model_dump()
            return jsonify(payload), HTTPStatus.UNAUTHORIZED

        response = jsonify(LoginSuccessDTO(redirect=LANDING_PATH).model_dump())
        return self._cookie.attach(response, session_id), HTTPStatus.OK

    def logout(self) -> Response:
        self._logout_use_case.execute(self._cookie.read(request))

        response = redirect(LOGIN_PATH)
        self._cookie.clear(response)
        logger.info(f"auth.logout: ok ip={_get_client_ip()}")
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/login", view_func=self.login_page, methods=["GET"])
        bp.add_url_rule("/login", view_func=self.login_form, methods=["POST"])
        bp.add_url_rule("/api/login", view_func=self.login_api, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/api/logout", endpoint="api_logout", view_func=self.logout, methods=["POST"])
        return bp
