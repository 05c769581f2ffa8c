# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from portal.application.use_cases.users.login_user import LoginUserUseCase
from portal.application.use_cases.users.logout_user import LogoutUserUseCase
from portal.domain.users.entities import Credential
from portal.domain.users.repositories import SessionStore
from portal.infrastructure.sessions.memory_store import InMemorySessionStore
from portal.interfaces.http.access_gate import AccessGate, AccessPolicy
from portal.interfaces.http.controllers.auth_controller import AuthController
from portal.interfaces.http.controllers.misc_controller import MiscController
from portal.interfaces.http.controllers.pages_controller import PagesController
from portal.interfaces.http.session_cookie import SessionCookie
from portal.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, *, session_store: SessionStore | None = None) -> None:
        self.config = config
        self._session_store_override = session_store

    @cached_property
    def credential(self) -> Credential:
        return Credential(
            username=self.config.credentials.username,
            password=self.config.credentials.password,
        )

    @cached_property
    def session_store(self) -> SessionStore:
        if self._session_store_override is not None:
            return self._session_store_override
        return InMemorySessionStore(ttl_seconds=self.config.session.ttl_seconds)

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie.from_config(self.config)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(credential=self.credential, sessions=self.session_store)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def access_gate(self) -> AccessGate:
        return AccessGate(
            sessions=self.session_store,
            cookie=self.session_cookie,
            policy=AccessPolicy(),
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            cookie=self.session_cookie,
            public_dir=self.config.server.public_dir,
        )

    @cached_property
    def pages_controller(self) -> PagesController:
        return PagesController(views_dir=self.config.server.views_dir)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()
